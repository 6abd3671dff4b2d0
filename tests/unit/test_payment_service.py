import unittest
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.orm import Session

from gymbook.crud import payment as payment_crud
from gymbook.errors.payment_errors import InvalidCardNumber, CardExpired
from gymbook.errors.subscription_errors import SubscriptionPackageNotFound
from gymbook.models import Payment, PaymentStatus, Subscription
from gymbook.services.payment import PaymentService, SUBSCRIPTION_WARNING, generate_transaction_id
from gymbook.services.subscription import SubscriptionService

CARD = {"card_number": "4111111111111111", "expiry_date": "12/99", "cvv": "123"}


class TestCheckout:
    def test_successful_checkout(self, db_session: Session, test_user, test_package):
        result = PaymentService(db_session).checkout(test_user.id, "basic_monthly", **CARD)

        assert result.transaction_id.startswith("txn_")
        assert result.status == PaymentStatus.SUCCESS
        assert result.amount == 29.99
        assert result.warning is None
        assert result.subscription is not None
        assert result.subscription.package_id == test_package.id
        assert result.subscription.is_active is True

        payment = payment_crud.get_payment_by_transaction_id(db_session, result.transaction_id)
        assert payment.user_id == test_user.id
        assert payment.package_id == test_package.id

        db_session.refresh(test_user)
        assert test_user.is_subscribed is True
        assert test_user.package_code == "basic_monthly"

    def test_amount_comes_from_catalogue(self, db_session: Session, test_user, premium_package):
        result = PaymentService(db_session).checkout(test_user.id, "premium_monthly", **CARD)
        assert result.amount == premium_package.price

    def test_transaction_ids_are_unique(self, db_session: Session, test_user, test_package):
        service = PaymentService(db_session)

        first = service.checkout(test_user.id, "basic_monthly", **CARD)
        second = service.checkout(test_user.id, "basic_monthly", **CARD)

        assert first.transaction_id != second.transaction_id
        assert db_session.query(Payment).count() == 2
        # Вторая покупка добавляет подписку, первая остается активной
        assert db_session.query(Subscription).filter(Subscription.is_active.is_(True)).count() == 2

    def test_unknown_package(self, db_session: Session, test_user):
        with pytest.raises(SubscriptionPackageNotFound):
            PaymentService(db_session).checkout(test_user.id, "gold_forever", **CARD)
        assert db_session.query(Payment).count() == 0

    def test_invalid_card_records_nothing(self, db_session: Session, test_user, test_package):
        with pytest.raises(InvalidCardNumber):
            PaymentService(db_session).checkout(test_user.id, "basic_monthly", **{**CARD, "card_number": "1234"})
        assert db_session.query(Payment).count() == 0
        assert db_session.query(Subscription).count() == 0

    def test_expired_card(self, db_session: Session, test_user, test_package):
        with pytest.raises(CardExpired):
            PaymentService(db_session).checkout(test_user.id, "basic_monthly", **{**CARD, "expiry_date": "01/20"})

    def test_failed_assignment_keeps_payment(self, db_session: Session, test_user, test_package):
        with patch.object(SubscriptionService, "assign_subscription", side_effect=RuntimeError("database went away")):
            result = PaymentService(db_session).checkout(test_user.id, "basic_monthly", **CARD)

        assert result.status == PaymentStatus.SUCCESS
        assert result.subscription is None
        assert result.warning == SUBSCRIPTION_WARNING

        payment = payment_crud.get_payment_by_transaction_id(db_session, result.transaction_id)
        assert payment is not None
        assert payment.status == PaymentStatus.SUCCESS
        assert db_session.query(Subscription).count() == 0

    def test_assignment_fails_for_principal_without_user_row(self, db_session: Session, test_package):
        # Токен без строки пользователя: оплата проходит, назначение падает на UserNotFound
        # (SQLite в тестах не проверяет внешние ключи)
        result = PaymentService(db_session).checkout(9999, "basic_monthly", **CARD)

        assert result.status == PaymentStatus.SUCCESS
        assert result.subscription is None
        assert result.warning == SUBSCRIPTION_WARNING

        payment = payment_crud.get_payment_by_transaction_id(db_session, result.transaction_id)
        assert payment is not None
        assert payment.user_id == 9999
        assert db_session.query(Subscription).count() == 0

    def test_payment_history(self, db_session: Session, test_user, other_user, test_package):
        service = PaymentService(db_session)
        service.checkout(test_user.id, "basic_monthly", **CARD)
        service.checkout(other_user.id, "basic_monthly", **CARD)

        history = service.get_payment_history(test_user.id)

        assert len(history) == 1
        assert history[0].user_id == test_user.id


class TestTransactionId(unittest.TestCase):

    def test_format(self):
        transaction_id = generate_transaction_id()
        self.assertTrue(transaction_id.startswith("txn_"))
        self.assertEqual(len(transaction_id), len("txn_") + 32)

    def test_no_collisions(self):
        ids = {generate_transaction_id() for _ in range(1000)}
        self.assertEqual(len(ids), 1000)


@patch.dict("os.environ", {"TESTING": "false"})
class TestCheckoutWithMocks(unittest.TestCase):

    def setUp(self):
        self.db_session = MagicMock()
        self.service = PaymentService(self.db_session)
        self.service.subscription_service = MagicMock()
        self.service.subscription_service.get_package_by_code.return_value = MagicMock(
            id=3, code="basic_monthly", price=29.99
        )

    @patch('gymbook.services.payment.crud')
    def test_payment_is_committed_before_assignment(self, mock_crud):
        # Arrange
        calls = []
        self.db_session.commit.side_effect = lambda: calls.append("commit")
        self.service.subscription_service.assign_subscription.side_effect = lambda **kwargs: calls.append("assign")
        mock_crud.create_payment.return_value = MagicMock(
            transaction_id="txn_abc", status=PaymentStatus.SUCCESS, amount=29.99
        )

        # Act
        self.service.checkout(1, "basic_monthly", **CARD)

        # Assert
        self.assertEqual(calls, ["commit", "assign"])
        kwargs = mock_crud.create_payment.call_args.kwargs
        self.assertEqual(kwargs["amount"], 29.99)
        self.assertEqual(kwargs["package_id"], 3)
        self.assertEqual(kwargs["status"], PaymentStatus.SUCCESS)

    @patch('gymbook.services.payment.crud')
    def test_assignment_error_is_not_raised(self, mock_crud):
        mock_crud.create_payment.return_value = MagicMock(
            transaction_id="txn_abc", status=PaymentStatus.SUCCESS, amount=29.99
        )
        self.service.subscription_service.assign_subscription.side_effect = ValueError("boom")

        result = self.service.checkout(1, "basic_monthly", **CARD)

        self.assertEqual(result.warning, SUBSCRIPTION_WARNING)
        self.db_session.rollback.assert_not_called()


if __name__ == '__main__':
    unittest.main()
