from __future__ import annotations

from .model import Person

# Mirrors database/seed.sql so the memory backend behaves like a seeded MySQL.
DEMO_PERSONS = (
    Person(person_id="STU-0001", full_name="Awa Diallo", department="Sciences", email="awa.diallo@example.org"),
    Person(person_id="STU-0002", full_name="Koffi Mensah", department="Sciences", email="koffi.mensah@example.org"),
    Person(person_id="STU-0003", full_name="Mariam Traore", department="Lettres", email="mariam.traore@example.org"),
    Person(person_id="STU-0004", full_name="Yao Kouassi", department="Lettres", email="yao.kouassi@example.org"),
    Person(person_id="STU-0005", full_name="Fatou Ndiaye", department="Economie"),
)
