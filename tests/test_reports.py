"""
Report endpoints: submission, reads, listing, status updates and deletion.
"""
from app.models.action import Action

API = "/api/v1"


# --- Submission ---

def test_anonymous_report_starts_pending_and_unassigned(client, make_category):
    cat = make_category(name="Facilities", role="Maintenance", contactInfo="x@x.com")

    r = client.post(
        f"{API}/reports",
        json={"categoryId": cat["id"], "description": "Broken light", "isAnonymous": True},
    )

    assert r.status_code == 201
    body = r.json()
    assert body["status"] == "success"
    report = body["data"]
    assert report["status"] == "Pending"
    assert report["userId"] is None
    assert report["responderId"] is None
    assert report["resolvedAt"] is None
    assert report["priority"] == "Medium"
    assert report["reporterName"] == "Anonymous"
    assert report["categoryName"] == "Facilities"
    assert report["actions"] == []
    assert report["actionCount"] == 0


def test_report_keeps_existing_user(client, make_category):
    u = client.post(f"{API}/users", json={"pseudonym": "owl", "campusDept": "Physics"}).json()["data"]
    cat = make_category()

    r = client.post(
        f"{API}/reports",
        json={"categoryId": cat["id"], "userId": u["id"], "description": "Leak", "priority": "High"},
    )

    data = r.json()["data"]
    assert data["userId"] == u["id"]
    assert data["reporterName"] == "owl"
    assert data["reporterDepartment"] == "Physics"
    assert data["priority"] == "High"


def test_unknown_user_is_filed_anonymously(client, make_category):
    cat = make_category()

    r = client.post(
        f"{API}/reports",
        json={"categoryId": cat["id"], "userId": 999, "description": "Leak", "isAnonymous": False},
    )

    assert r.status_code == 201
    assert r.json()["data"]["userId"] is None
    assert r.json()["data"]["reporterName"] == "Anonymous"


def test_anonymous_flag_wins_over_user_id(client, make_category):
    u = client.post(f"{API}/users", json={"pseudonym": "owl"}).json()["data"]
    cat = make_category()

    r = client.post(
        f"{API}/reports",
        json={"categoryId": cat["id"], "userId": u["id"], "description": "Leak", "isAnonymous": True},
    )

    assert r.json()["data"]["userId"] is None


def test_unknown_category_is_404(client):
    r = client.post(f"{API}/reports", json={"categoryId": 42, "description": "Leak"})

    assert r.status_code == 404
    body = r.json()
    assert body["status"] == "error"
    assert body["message"] == "Category not found"
    assert body["traceId"]


def test_missing_description_is_400(client, make_category):
    cat = make_category()

    r = client.post(f"{API}/reports", json={"categoryId": cat["id"]})

    assert r.status_code == 400
    body = r.json()
    assert body["status"] == "error"
    assert "description" in body["message"]
    assert isinstance(body["details"], list)


def test_blank_description_is_400(client, make_category):
    cat = make_category()

    r = client.post(f"{API}/reports", json={"categoryId": cat["id"], "description": "   "})

    assert r.status_code == 400


def test_unknown_priority_is_400(client, make_category):
    cat = make_category()

    r = client.post(
        f"{API}/reports",
        json={"categoryId": cat["id"], "description": "Leak", "priority": "Urgent"},
    )

    assert r.status_code == 400


# --- Reads ---

def test_get_report_includes_actions_and_response_time(client, make_report, make_responder, log_action):
    rep = make_report()
    resp = make_responder()
    log_action(rep["id"], resp["id"], description="Replaced bulb", type="Repair")

    r = client.get(f"{API}/reports/{rep['id']}")

    assert r.status_code == 200
    data = r.json()["data"]
    assert data["actionCount"] == 1
    assert len(data["actions"]) == 1
    assert data["actions"][0]["description"] == "Replaced bulb"
    assert data["actions"][0]["type"] == "Repair"
    assert data["actions"][0]["responderName"] == "A. Lee"
    assert data["responseTimeHours"] == 0
    assert data["responderName"] == "A. Lee"


def test_get_missing_report_is_404(client):
    r = client.get(f"{API}/reports/123")

    assert r.status_code == 404
    assert r.json()["message"] == "Report not found"


def test_list_reports_pages_with_total(client, make_category, make_report):
    cat = make_category()
    for i in range(3):
        make_report(category_id=cat["id"], description=f"Report {i}")

    r = client.get(f"{API}/reports", params={"limit": 2, "offset": 0})

    assert r.status_code == 200
    body = r.json()
    assert body["results"] == 2
    assert body["total"] == 3
    assert r.headers["X-Total-Count"] == "3"
    # newest first
    assert body["data"][0]["description"] == "Report 2"


def test_list_reports_filters_by_status_and_category(client, make_category, make_report, set_status):
    a = make_category()
    b = make_category()
    r1 = make_report(category_id=a["id"])
    make_report(category_id=a["id"])
    make_report(category_id=b["id"])
    set_status(r1["id"], "Closed")

    closed = client.get(f"{API}/reports", params={"status": "Closed"}).json()
    in_a = client.get(f"{API}/reports", params={"categoryId": a["id"]}).json()

    assert closed["total"] == 1
    assert closed["data"][0]["id"] == r1["id"]
    assert in_a["total"] == 2


def test_list_reports_rejects_bad_paging(client):
    assert client.get(f"{API}/reports", params={"limit": 0}).status_code == 400
    assert client.get(f"{API}/reports", params={"limit": 201}).status_code == 400
    assert client.get(f"{API}/reports", params={"offset": -1}).status_code == 400


def test_reports_by_status(client, make_report, set_status):
    a = make_report()
    make_report()
    set_status(a["id"], "In Progress")

    r = client.get(f"{API}/reports/status/In Progress")

    assert r.status_code == 200
    assert r.json()["results"] == 1
    assert r.json()["data"][0]["id"] == a["id"]


def test_reports_by_unknown_status_is_400(client):
    r = client.get(f"{API}/reports/status/Bogus")

    assert r.status_code == 400
    assert r.json()["message"].startswith("Invalid status. Must be one of:")


# --- Status updates ---

def test_invalid_status_lists_valid_set(client, make_report, set_status):
    rep = make_report()

    r = set_status(rep["id"], "Done")

    assert r.status_code == 400
    body = r.json()
    assert "Pending" in body["message"]
    assert body["details"]["validStatuses"] == [
        "Pending",
        "In Progress",
        "Under Review",
        "Resolved",
        "Closed",
    ]


def test_status_update_on_missing_report_is_404(client, set_status):
    assert set_status(77, "Resolved").status_code == 404


def test_status_update_with_unknown_responder_is_404(client, make_report, set_status):
    rep = make_report()

    r = set_status(rep["id"], "In Progress", responder_id=555)

    assert r.status_code == 404
    assert r.json()["message"] == "Responder not found"
    # nothing applied
    assert client.get(f"{API}/reports/{rep['id']}").json()["data"]["status"] == "Pending"


def test_any_whitelisted_transition_is_allowed(client, make_report, set_status):
    rep = make_report()

    for status in ("Closed", "Pending", "Under Review", "In Progress"):
        r = set_status(rep["id"], status)
        assert r.status_code == 200
        assert r.json()["data"]["status"] == status


def test_status_update_assigns_responder(client, make_report, make_responder, set_status):
    rep = make_report()
    resp = make_responder()

    r = set_status(rep["id"], "In Progress", responder_id=resp["id"])

    assert r.json()["data"]["responderId"] == resp["id"]
    assert r.json()["data"]["responderName"] == "A. Lee"


def test_under_review_can_be_disabled(client, make_report, set_status, settings_env):
    rep = make_report()
    settings_env(ALLOW_UNDER_REVIEW_STATUS="0")

    r = set_status(rep["id"], "Under Review")

    assert r.status_code == 400
    assert r.json()["details"]["validStatuses"] == ["Pending", "In Progress", "Resolved", "Closed"]


# --- Deletion ---

def test_delete_blocked_while_in_progress(client, make_report, set_status):
    rep = make_report()
    set_status(rep["id"], "In Progress")

    r = client.delete(f"{API}/reports/{rep['id']}")

    assert r.status_code == 400
    assert r.json()["message"] == "Cannot delete active reports. Please resolve first."
    assert client.get(f"{API}/reports/{rep['id']}").status_code == 200


def test_delete_blocked_while_under_review(client, make_report, set_status):
    rep = make_report()
    set_status(rep["id"], "Under Review")

    assert client.delete(f"{API}/reports/{rep['id']}").status_code == 400


def test_delete_pending_report(client, make_report):
    rep = make_report()

    r = client.delete(f"{API}/reports/{rep['id']}")

    assert r.status_code == 200
    assert r.json() == {"status": "success", "message": "Report deleted successfully"}
    assert client.get(f"{API}/reports/{rep['id']}").status_code == 404


def test_delete_cascades_to_actions(client, db, make_report, make_responder, log_action, set_status):
    rep = make_report()
    resp = make_responder()
    log_action(rep["id"], resp["id"])
    log_action(rep["id"], resp["id"], description="Follow-up")
    set_status(rep["id"], "Resolved")

    r = client.delete(f"{API}/reports/{rep['id']}")

    assert r.status_code == 200
    assert db.query(Action).filter(Action.report_id == rep["id"]).count() == 0
    assert client.get(f"{API}/actions/report/{rep['id']}").status_code == 404


def test_delete_missing_report_is_404(client):
    assert client.delete(f"{API}/reports/9").status_code == 404
