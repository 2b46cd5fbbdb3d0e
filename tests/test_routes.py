import pytest
from fastapi.testclient import TestClient

from config.settings import settings
from main import app

PREFIX = settings.API_PREFIX

EMPLOYEES = [
    {
        "id": 1,
        "fullName": "Ali Raza",
        "cnic": "36302-1234567-1",
        "gender": "Male",
        "status": "Active",
        "employmentHistory": [
            {"hqId": 1, "bps": "BPS-17", "fromDate": "2020-01-01", "status": "In-Service",
             "isCurrentlyWorking": True, "leaves": [], "disciplinaryActions": []},
        ],
    },
    {
        "id": 2,
        "fullName": "Sara Khan",
        "gender": "Female",
        "status": "Suspended",
        "employmentHistory": [
            {"hqId": 2, "bps": "BPS-11", "fromDate": "2021-01-01", "status": "Suspended",
             "statusDate": "2023-02-01", "leaves": None},
        ],
    },
    {"id": 3, "fullName": "Bilal Ahmed", "employmentHistory": None},
]


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_vocabulary(client):
    body = client.get(f"{PREFIX}/vocabulary").json()
    assert "OSD" in body["statusOptions"]
    assert "Medical Leave" in body["leaveTypes"]
    assert body["bpsGrades"][-1] == "BPS-22"
    assert body["categories"]["retired"] == "Terminal"


def test_filter_route(client):
    res = client.post(f"{PREFIX}/employees/filter", json={
        "employees": EMPLOYEES,
        "filters": {"query": "363021234567", "hqId": ["1"], "status": ""},
    })
    assert res.status_code == 200
    body = res.json()
    assert body["count"] == 1
    assert body["employees"][0]["id"] == "1"
    assert body["employees"][0]["employmentHistory"][0]["isCurrentlyWorking"] is True


def test_filter_route_without_filters_returns_everyone(client):
    body = client.post(f"{PREFIX}/employees/filter", json={"employees": EMPLOYEES}).json()
    assert [e["id"] for e in body["employees"]] == ["1", "2", "3"]


def test_filter_route_rejects_malformed_payload(client):
    res = client.post(f"{PREFIX}/employees/filter", json={"employees": "nope"})
    assert res.status_code == 422


def test_can_rejoin_route(client):
    body = client.post(f"{PREFIX}/employees/can-rejoin", json={"employees": EMPLOYEES}).json()
    assert body == [
        {"id": "1", "canRejoin": False},
        {"id": "2", "canRejoin": True},
        {"id": "3", "canRejoin": False},
    ]


def test_status_route(client):
    body = client.post(f"{PREFIX}/employees/status", json={"employees": EMPLOYEES}).json()
    assert [b["status"] for b in body] == ["In-Service", "Suspended", "In-Service"]
    assert body[1]["statusDate"] == "2023-02-01"


def test_summary_route(client):
    body = client.post(f"{PREFIX}/employees/summary", json={"employees": EMPLOYEES}).json()
    assert body["totalEmployees"] == 3
    assert body["inService"] == 2
    assert body["separated"] == 1


def test_facets_route(client):
    body = client.post(f"{PREFIX}/employees/facets", json={"employees": EMPLOYEES}).json()
    assert body["bpsGrades"] == ["BPS-11", "BPS-17"]
    assert body["genders"] == ["Female", "Male"]


def test_current_block_route(client):
    res = client.post(f"{PREFIX}/employees/current-block", json={"employee": EMPLOYEES[1]})
    assert res.status_code == 200
    assert res.json()["hqId"] == "2"

    res = client.post(f"{PREFIX}/employees/current-block", json={"employee": EMPLOYEES[2]})
    assert res.status_code == 404
