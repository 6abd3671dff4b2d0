from datetime import datetime, timedelta, timezone

from gymbook.models import Gym, TrainingSession

GYM_PAYLOAD = {
    "name": "Riverside Gym",
    "location": "River road 5",
    "latitude": 52.4064,
    "longitude": 16.9252,
    "rating": 4.1,
    "keywords": ["pool", "Sauna"],
}


class TestGymEndpoints:
    def test_list_and_get(self, client, test_gym, test_session):
        listed = client.get("/api/gyms")
        single = client.get(f"/api/gyms/{test_gym.id}")

        assert listed.status_code == 200
        assert [g["id"] for g in listed.json()["data"]] == [test_gym.id]
        assert single.json()["data"]["sessions"] == [test_session.id]

    def test_missing_gym(self, client):
        response = client.get("/api/gyms/9999")

        assert response.status_code == 404
        assert response.json()["message"] == "Gym not found"

    def test_create_gym_is_owned_by_creator(self, client, test_gym_admin, admin_headers):
        response = client.post("/api/gyms", json=GYM_PAYLOAD, headers=admin_headers)

        assert response.status_code == 201
        gym_id = response.json()["data"]["id"]
        admin = client.get(f"/api/gym-admins/{test_gym_admin.id}", headers=admin_headers).json()["data"]
        assert gym_id in [g["id"] for g in admin["gyms"]]

    def test_create_gym_requires_admin(self, client, user_headers):
        response = client.post("/api/gyms", json=GYM_PAYLOAD, headers=user_headers)
        assert response.status_code == 403

    def test_rating_out_of_range(self, client, admin_headers):
        response = client.post("/api/gyms", json={**GYM_PAYLOAD, "rating": 7}, headers=admin_headers)
        assert response.status_code == 422

    def test_update_by_owner(self, client, test_gym, admin_headers):
        response = client.put(f"/api/gyms/{test_gym.id}", json={"name": "Uptown Fitness"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Uptown Fitness"
        assert response.json()["data"]["location"] == test_gym.location

    def test_update_by_other_admin(self, client, test_gym, other_admin_headers):
        response = client.put(f"/api/gyms/{test_gym.id}", json={"name": "Mine now"}, headers=other_admin_headers)
        assert response.status_code == 403

    def test_update_missing_gym(self, client, admin_headers):
        response = client.put("/api/gyms/9999", json={"name": "Ghost"}, headers=admin_headers)
        assert response.status_code == 404

    def test_update_with_null_name(self, client, test_gym, admin_headers):
        response = client.put(f"/api/gyms/{test_gym.id}", json={"name": None}, headers=admin_headers)

        assert response.status_code == 422
        assert response.json()["success"] is False
        assert response.json()["error"][0]["msg"] == "name cannot be null"

    def test_delete_gym_removes_its_sessions(self, client, db_session, test_gym, test_session, admin_headers):
        gym_id, session_id = test_gym.id, test_session.id

        response = client.delete(f"/api/gyms/{gym_id}", headers=admin_headers)

        assert response.status_code == 200
        db_session.expire_all()
        assert db_session.get(Gym, gym_id) is None
        assert db_session.get(TrainingSession, session_id) is None


class TestGymSearchAndFilter:
    def test_search_by_keyword_tag(self, client, test_gym):
        response = client.get("/api/gyms/search", params={"keyword": "weights"})
        assert [g["id"] for g in response.json()["data"]] == [test_gym.id]

    def test_search_by_name(self, client, test_gym):
        response = client.get("/api/gyms/search", params={"keyword": "DOWNTOWN"})
        assert [g["id"] for g in response.json()["data"]] == [test_gym.id]

    def test_empty_keyword_returns_all(self, client, test_gym):
        response = client.get("/api/gyms/search", params={"keyword": ""})
        assert len(response.json()["data"]) == 1

    def test_no_match(self, client, test_gym):
        response = client.get("/api/gyms/search", params={"keyword": "boxing"})
        assert response.json()["data"] == []

    def test_filter_by_session_type(self, client, db_session, test_gym, test_session, test_gym_admin):
        other_gym = Gym(name="Box Club", location="Side street", latitude=50.06, longitude=19.94, keywords=[])
        other_gym.admins.append(test_gym_admin)
        db_session.add(other_gym)
        db_session.commit()
        db_session.add(TrainingSession(
            gym_id=other_gym.id,
            name="Sparring",
            date_time=datetime.now(timezone.utc) + timedelta(days=2),
            description="Boxing rounds",
            type="boxing",
            capacity=10,
            trainer_name="Max",
        ))
        db_session.commit()

        response = client.get("/api/gyms/filter", params={"sessionType": "YOGA"})

        assert [g["id"] for g in response.json()["data"]] == [test_gym.id]

    def test_filter_by_unknown_session_type(self, client, test_session):
        response = client.get("/api/gyms/filter", params={"sessionType": "parkour"})
        assert response.json()["data"] == []

    def test_filter_by_distance(self, client, test_gym):
        # Варшава -> Лодзь примерно 120 км
        near = client.get("/api/gyms/filter", params={"latitude": 51.7592, "longitude": 19.4560, "distance": 150})
        far = client.get("/api/gyms/filter", params={"latitude": 51.7592, "longitude": 19.4560, "distance": 50})

        assert [g["id"] for g in near.json()["data"]] == [test_gym.id]
        assert far.json()["data"] == []


class TestGymAdminEndpoints:
    def test_register_and_login(self, client):
        created = client.post(
            "/api/gym-admins",
            json={"username": "coach", "email": "coach@example.com", "password": "secret123"},
        )
        assert created.status_code == 201
        assert created.json()["data"]["gyms"] == []

        login = client.post("/api/gym-admins/login", json={"email": "coach@example.com", "password": "secret123"})
        assert login.status_code == 200
        assert login.json()["data"]["role"] == "gymAdmin"

    def test_register_duplicate_email(self, client, test_gym_admin):
        response = client.post(
            "/api/gym-admins",
            json={"username": "copycat", "email": test_gym_admin.email, "password": "secret123"},
        )
        assert response.status_code == 400

    def test_login_wrong_password(self, client, test_gym_admin):
        response = client.post("/api/gym-admins/login", json={"email": test_gym_admin.email, "password": "nope-nope"})
        assert response.status_code == 401

    def test_attach_gym_twice_is_idempotent(self, client, db_session, test_gym_admin, admin_headers):
        gym = Gym(name="Orphan Gym", location="Nowhere", latitude=0, longitude=0, keywords=[])
        db_session.add(gym)
        db_session.commit()
        url = f"/api/gym-admins/{test_gym_admin.id}/gyms"

        first = client.post(url, json={"gymId": gym.id}, headers=admin_headers)
        second = client.post(url, json={"gymId": gym.id}, headers=admin_headers)

        assert first.status_code == 200
        assert [g["id"] for g in second.json()["data"]["gyms"]].count(gym.id) == 1

    def test_cannot_claim_gym_of_another_admin(self, client, other_gym_admin, test_gym, other_admin_headers):
        response = client.post(
            f"/api/gym-admins/{other_gym_admin.id}/gyms",
            json={"gymId": test_gym.id},
            headers=other_admin_headers,
        )
        assert response.status_code == 403

    def test_cannot_attach_for_another_admin(self, client, other_gym_admin, test_gym, admin_headers):
        response = client.post(
            f"/api/gym-admins/{other_gym_admin.id}/gyms",
            json={"gymId": test_gym.id},
            headers=admin_headers,
        )
        assert response.status_code == 403

    def test_attach_missing_gym(self, client, test_gym_admin, admin_headers):
        response = client.post(f"/api/gym-admins/{test_gym_admin.id}/gyms", json={"gymId": 9999}, headers=admin_headers)
        assert response.status_code == 404
