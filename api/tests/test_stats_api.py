"""
Tests for statistics endpoints.
"""
API = "/api"


def _card(client, name, subject):
    return client.post(f"{API}/cards", json={"card_name": name, "subject": subject}).json()


def _review(client, card_id, score, review_date):
    return client.post(
        f"{API}/reviews",
        json={"card_id": card_id, "familiarity_score": score, "review_date": review_date},
    ).json()


def test_stats(client):
    reviewed_twice = _card(client, "Dijkstra", "Algorithms")
    reviewed_once = _card(client, "Heap", "Algorithms")
    _card(client, "Never reviewed", "Algorithms")

    _review(client, reviewed_twice["id"], 2, "2024-06-10")  # interval 2
    _review(client, reviewed_twice["id"], 2, "2024-06-10")  # round(2 * 0.5) = 1, due 2024-06-11
    _review(client, reviewed_once["id"], 4, "2024-06-08")   # interval 5, due 2024-06-13

    stats = client.get(f"{API}/stats", params={"as_of": "2024-06-10"}).json()
    assert stats == {
        "total_cards": 3,
        "cards_to_review_today": 1,
        "completed_today": 1,
        "due_soon": 2,
        "avg_familiarity": 3.0,
    }


def test_stats_without_cards(client):
    stats = client.get(f"{API}/stats").json()
    assert stats["total_cards"] == 0
    assert stats["avg_familiarity"] == 0


def test_subject_distribution(client):
    for name in ("Physics", "Biology"):
        client.post(f"{API}/subjects", json={"name": name})
    _card(client, "Ohm's law", "Physics")
    _card(client, "Entropy", "Physics")
    _card(client, "Orphan", "Deleted")

    distribution = client.get(f"{API}/stats/subject-distribution").json()["distribution"]
    assert distribution == [
        {"subject": "Physics", "count": 2},
        {"subject": "Biology", "count": 0},
    ]


def test_familiarity_distribution_uses_last_review(client):
    card = _card(client, "Eigenvalues", "Linear Algebra")
    _card(client, "Never reviewed", "Linear Algebra")
    _review(client, card["id"], 1, "2024-06-01")
    _review(client, card["id"], 4, "2024-06-02")

    distribution = client.get(f"{API}/stats/familiarity-distribution").json()["distribution"]
    assert distribution == [
        {"level": 1, "count": 0},
        {"level": 2, "count": 0},
        {"level": 3, "count": 0},
        {"level": 4, "count": 1},
        {"level": 5, "count": 0},
    ]


def test_stats_as_of_too_late_is_rejected(client):
    _card(client, "Heap", "Algorithms")
    response = client.get(f"{API}/stats", params={"as_of": "9999-12-30"})
    assert response.status_code == 422
