from src.domain.herd_summary import STATUS_COLORS, build_summary, status_color
from src.models.animal import AnimalStatus


def test_stats_count_callers_animals(client, auth_headers, other_headers, create_animal):
    create_animal(number="A1", type="cow", status="active", gender="female")
    create_animal(number="A2", type="cow", status="sold", gender="male")
    create_animal(number="A3", type="goat", status="active", gender="female")
    create_animal(number="B1", headers=other_headers, type="goat", status="dead")

    res = client.get("/dashboard/stats", headers=auth_headers)

    assert res.status_code == 200
    body = res.json()
    assert body["total"] == 3
    assert body["by_type"] == {"cow": 2, "goat": 1}
    assert body["by_gender"] == {"male": 1, "female": 2}
    assert {s["status"]: s["count"] for s in body["by_status"]} == {
        "active": 2,
        "sold": 1,
        "dead": 0,
        "other": 0,
    }


def test_stats_for_empty_herd(client, auth_headers):
    body = client.get("/dashboard/stats", headers=auth_headers).json()
    assert body["total"] == 0
    assert all(s["count"] == 0 for s in body["by_status"])


def test_stats_require_token(client):
    assert client.get("/dashboard/stats").status_code == 401


def test_every_status_has_a_color():
    assert set(STATUS_COLORS) == set(AnimalStatus)
    assert status_color("dead") == "error"
    assert status_color(AnimalStatus.ACTIVE) == "success"


def test_build_summary_zero_fills_and_attaches_colors():
    summary = build_summary({"cow": 4}, {"sold": 4}, {"male": 1, "female": 3})

    assert summary["total"] == 4
    assert summary["by_type"] == {"cow": 4, "goat": 0}
    assert summary["by_status"][1] == {"status": "sold", "count": 4, "color": "warning"}
    assert [s["status"] for s in summary["by_status"]] == [s.value for s in AnimalStatus]
