"""
Integration tests for equipment status reports and voice memos.
"""

import pytest

from conftest import auth_header

REPORT = {
    "equipment_id": "PUMP-07",
    "status": "faulty",
    "description": "Bearing noise above threshold"
}


@pytest.mark.asyncio
async def test_report_is_filed_under_caller(client, admin_token, engineer_login):
    """A user_id in the body is ignored; the reporter is always the caller."""
    admin_id = (await client.get("/api/auth/me", headers=auth_header(admin_token))).json()["id"]

    response = await client.post(
        "/api/reports",
        json={**REPORT, "user_id": admin_id},
        headers=auth_header(engineer_login["token"])
    )
    assert response.status_code == 200
    report_id = response.json()["id"]

    reports = (await client.get("/api/reports", headers=auth_header(admin_token))).json()
    stored = next(r for r in reports if r["id"] == report_id)
    assert stored["user_id"] == engineer_login["user"]["id"]
    assert stored["username"] == "engineer1"
    assert stored["audio_file"] is None


@pytest.mark.asyncio
async def test_invalid_status_is_rejected(client, engineer_token):
    response = await client.post(
        "/api/reports",
        json={**REPORT, "status": "exploded"},
        headers=auth_header(engineer_token)
    )
    assert response.status_code == 400
    assert response.json()["error_code"] == "ERR_DOMAIN_001"

    reports = await client.get("/api/reports", headers=auth_header(engineer_token))
    assert reports.json() == []


@pytest.mark.asyncio
async def test_report_list_is_scoped(client, admin_token, engineer_token, second_engineer):
    await client.post("/api/reports", json=REPORT, headers=auth_header(engineer_token))
    await client.post("/api/reports", json={**REPORT, "status": "working"}, headers=auth_header(second_engineer["token"]))
    await client.post("/api/reports", json={**REPORT, "status": "maintenance"}, headers=auth_header(admin_token))

    own = (await client.get("/api/reports", headers=auth_header(engineer_token))).json()
    assert [r["status"] for r in own] == ["faulty"]

    everything = (await client.get("/api/reports", headers=auth_header(admin_token))).json()
    assert [r["status"] for r in everything] == ["maintenance", "working", "faulty"]


@pytest.mark.asyncio
async def test_audio_report_upload_and_download(client, engineer_token, context):
    response = await client.post(
        "/api/reports/audio",
        data={"equipment_id": "FAN-2", "status": "maintenance", "description": "voice memo"},
        files={"audio": ("memo.webm", b"\x1aE\xdf\xa3webm-bytes", "audio/webm")},
        headers=auth_header(engineer_token)
    )
    assert response.status_code == 200, response.text
    data = response.json()
    audio_file = data["audio_file"]
    assert audio_file.startswith("audio-")
    assert audio_file.endswith(".webm")
    assert "memo" not in audio_file
    assert (context.attachments.directory / audio_file).is_file()

    reports = (await client.get("/api/reports", headers=auth_header(engineer_token))).json()
    assert reports[0]["id"] == data["id"]
    assert reports[0]["audio_file"] == audio_file

    download = await client.get(f"/api/reports/audio/{audio_file}", headers=auth_header(engineer_token))
    assert download.status_code == 200
    assert download.content == b"\x1aE\xdf\xa3webm-bytes"


@pytest.mark.asyncio
async def test_audio_of_other_engineer_is_hidden(client, admin_token, engineer_token, second_engineer):
    response = await client.post(
        "/api/reports/audio",
        data={"status": "working"},
        files={"audio": ("memo.ogg", b"OggS", "audio/ogg")},
        headers=auth_header(engineer_token)
    )
    audio_file = response.json()["audio_file"]

    other = await client.get(f"/api/reports/audio/{audio_file}", headers=auth_header(second_engineer["token"]))
    assert other.status_code == 404

    admin = await client.get(f"/api/reports/audio/{audio_file}", headers=auth_header(admin_token))
    assert admin.status_code == 200


@pytest.mark.asyncio
async def test_non_audio_upload_is_rejected(client, engineer_token, context):
    response = await client.post(
        "/api/reports/audio",
        data={"status": "faulty"},
        files={"audio": ("photo.png", b"\x89PNG", "image/png")},
        headers=auth_header(engineer_token)
    )
    assert response.status_code == 415
    assert response.json()["error"] == "Only audio files are allowed"

    reports = await client.get("/api/reports", headers=auth_header(engineer_token))
    assert reports.json() == []
    assert list(context.attachments.directory.iterdir()) == []


@pytest.mark.asyncio
async def test_oversized_upload_is_rejected(client, engineer_token, context):
    context.attachments.max_bytes = 1024

    response = await client.post(
        "/api/reports/audio",
        data={"status": "faulty"},
        files={"audio": ("long.webm", b"x" * 1025, "audio/webm")},
        headers=auth_header(engineer_token)
    )
    assert response.status_code == 413

    reports = await client.get("/api/reports", headers=auth_header(engineer_token))
    assert reports.json() == []


@pytest.mark.asyncio
async def test_audio_report_with_invalid_status_stores_nothing(client, engineer_token, context):
    response = await client.post(
        "/api/reports/audio",
        data={"status": "broken"},
        files={"audio": ("memo.webm", b"webm", "audio/webm")},
        headers=auth_header(engineer_token)
    )
    assert response.status_code == 400
    assert list(context.attachments.directory.iterdir()) == []


@pytest.mark.asyncio
async def test_audio_report_without_file(client, engineer_token):
    response = await client.post(
        "/api/reports/audio",
        data={"equipment_id": "VALVE-1", "status": "working"},
        headers=auth_header(engineer_token)
    )
    assert response.status_code == 200
    assert response.json()["audio_file"] is None


@pytest.mark.asyncio
async def test_unknown_audio_name_is_404(client, engineer_token):
    response = await client.get("/api/reports/audio/..%2Fsecret.txt", headers=auth_header(engineer_token))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_report_for_vanished_user_is_not_a_status_error(client, context):
    """A validly signed token for a user id with no row yields 404, not a bogus status error."""
    ghost = context.tokens.issue(user_id=999, username="ghost", role="engineer")

    response = await client.post("/api/reports", json={"status": "working"}, headers=auth_header(ghost))
    assert response.status_code == 404
    assert response.json()["error"] == "User with ID 999 not found"


@pytest.mark.asyncio
async def test_audio_for_vanished_user_leaves_no_file(client, context):
    ghost = context.tokens.issue(user_id=999, username="ghost", role="engineer")

    response = await client.post(
        "/api/reports/audio",
        data={"status": "working"},
        files={"audio": ("memo.webm", b"webm", "audio/webm")},
        headers=auth_header(ghost)
    )
    assert response.status_code == 404
    assert list(context.attachments.directory.iterdir()) == []
