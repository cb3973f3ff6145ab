from attendance_scanner.persons.badge import render_badge_png

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def test_badge_is_png():
    data = render_badge_png("STU-0001")

    assert data.startswith(PNG_MAGIC)
    assert len(data) > 100
