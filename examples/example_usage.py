"""Example: drive the scan workflow through the service layer (no Flask).

Uses the in-memory backend and a fixed clock, so it runs without MySQL.
"""

import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from attendance_scanner.container import build_container
from attendance_scanner.core.enums import StoreBackend
from attendance_scanner.core.exceptions import DuplicateScanError
from attendance_scanner.core.settings import ScannerSettings


def main():
    container = build_container(
        settings=ScannerSettings(store_backend=StoreBackend.MEMORY),
        clock=lambda: datetime(2026, 3, 2, 8, 5),
    )

    session = container.sessions.open("agent-1")
    session.start_scan()

    candidate = session.submit_token("STU-0001")
    print("candidate:", candidate.person.full_name, candidate.decision.status.value)
    print("recorded:", session.confirm().to_dict())

    session.submit_token("STU-0001")
    try:
        session.confirm()
    except DuplicateScanError as e:
        print("duplicate:", e)

    session.stop_scan()
    print(container.stats.get_daily_stats(container.today()).to_dict())


if __name__ == "__main__":
    main()
