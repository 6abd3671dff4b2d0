from unittest.mock import patch

from gymbook.models import Payment, Subscription
from gymbook.services.subscription import SubscriptionService

CARD = {"cardNumber": "4111111111111111", "expiryDate": "12/99", "cvv": "123"}


class TestCheckoutEndpoint:
    def test_checkout_success(self, client, test_user, test_package, user_headers):
        response = client.post("/api/payments/checkout/basic_monthly", json=CARD, headers=user_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["transactionId"].startswith("txn_")
        assert data["status"] == "success"
        assert data["amount"] == 29.99
        assert data["subscription"]["packageId"] == test_package.id
        assert data["subscription"]["isActive"] is True
        assert data["warning"] is None

        profile = client.get(f"/api/users/{test_user.id}", headers=user_headers).json()["data"]
        assert profile["isSubscribed"] is True
        assert profile["packageID"] == "basic_monthly"

    def test_card_with_spaces_and_numeric_cvv(self, client, test_package, user_headers):
        payload = {"cardNumber": "4111 1111 1111 1111", "expiryDate": "2099-12", "cvv": 123}
        response = client.post("/api/payments/checkout/basic_monthly", json=payload, headers=user_headers)
        assert response.status_code == 200

    def test_client_amount_is_ignored(self, client, test_package, user_headers):
        payload = {**CARD, "amount": 0.01}
        response = client.post("/api/payments/checkout/basic_monthly", json=payload, headers=user_headers)

        assert response.status_code == 200
        assert response.json()["data"]["amount"] == 29.99

    def test_short_card_number(self, client, db_session, test_package, user_headers):
        response = client.post(
            "/api/payments/checkout/basic_monthly",
            json={**CARD, "cardNumber": "1234"},
            headers=user_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "cardNumber must be a 16 digit number"
        assert db_session.query(Payment).count() == 0

    def test_expired_card(self, client, test_package, user_headers):
        response = client.post(
            "/api/payments/checkout/basic_monthly",
            json={**CARD, "expiryDate": "01/20"},
            headers=user_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Card expiry date is in the past"

    def test_bad_expiry_format(self, client, test_package, user_headers):
        response = client.post(
            "/api/payments/checkout/basic_monthly",
            json={**CARD, "expiryDate": "next year"},
            headers=user_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid expiry date format"

    def test_missing_cvv(self, client, test_package, user_headers):
        payload = {"cardNumber": "4111111111111111", "expiryDate": "12/99"}
        response = client.post("/api/payments/checkout/basic_monthly", json=payload, headers=user_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid cvv"

    def test_unknown_package(self, client, user_headers):
        response = client.post("/api/payments/checkout/gold_forever", json=CARD, headers=user_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Subscription package not found"

    def test_storage_id_is_not_accepted_as_package_id(self, client, test_package, user_headers):
        response = client.post(f"/api/payments/checkout/{test_package.id}", json=CARD, headers=user_headers)
        assert response.status_code == 404

    def test_requires_token(self, client, test_package):
        response = client.post("/api/payments/checkout/basic_monthly", json=CARD)
        assert response.status_code == 401

    def test_invalid_token(self, client, test_package):
        response = client.post(
            "/api/payments/checkout/basic_monthly",
            json=CARD,
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired token."

    def test_gym_admin_cannot_checkout(self, client, test_package, admin_headers):
        response = client.post("/api/payments/checkout/basic_monthly", json=CARD, headers=admin_headers)
        assert response.status_code == 403

    def test_subscription_failure_returns_warning(self, client, db_session, test_package, user_headers):
        with patch.object(SubscriptionService, "assign_subscription", side_effect=RuntimeError("boom")):
            response = client.post("/api/payments/checkout/basic_monthly", json=CARD, headers=user_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "success"
        assert data["subscription"] is None
        assert data["warning"] == "Payment succeeded but the subscription could not be created"
        assert db_session.query(Payment).count() == 1

    def test_subscription_failure_without_mocks(self, client, db_session, test_package, orphan_user_headers):
        # Пользователя 9999 нет в базе, назначение подписки падает внутри своей транзакции
        response = client.post("/api/payments/checkout/basic_monthly", json=CARD, headers=orphan_user_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "success"
        assert data["subscription"] is None
        assert data["warning"] == "Payment succeeded but the subscription could not be created"
        assert db_session.query(Payment).count() == 1
        assert db_session.query(Subscription).count() == 0

    def test_fullwidth_card_digits_are_rejected(self, client, test_package, user_headers):
        payload = {**CARD, "cardNumber": "４１１１１１１１１１１１１１１１"}

        response = client.post("/api/payments/checkout/basic_monthly", json=payload, headers=user_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "cardNumber must be a 16 digit number"


class TestPaymentHistoryEndpoint:
    def test_history_contains_own_payments(self, client, test_user, test_package, user_headers, other_user_headers):
        client.post("/api/payments/checkout/basic_monthly", json=CARD, headers=user_headers)
        client.post("/api/payments/checkout/basic_monthly", json=CARD, headers=other_user_headers)

        response = client.get("/api/payments/history", headers=user_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["userId"] == test_user.id
        assert data[0]["status"] == "success"
