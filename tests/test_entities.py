"""Tests for domain entities."""

import pytest

from ledgerit.domain.calendar import DateTime
from ledgerit.domain.entities import Account, AccountType, Transaction
from ledgerit.domain.errors import (
    AccountNotAssociatedWithTransaction,
    ParseError,
    UnknownAccount,
    ValidationError,
)
from ledgerit.domain.money import Amount


def _groceries(**overrides):
    fields = {
        "name": "Groceries",
        "notes": "",
        "datetime": DateTime.parse("2023-07-13 14:54"),
        "amounts": [("asset/bank", "-132 SEK"), ("expense/food", "-132 SEK")],
    }
    fields.update(overrides)
    return Transaction.from_strings(
        fields["name"], fields["notes"], fields["datetime"], fields["amounts"], fields.get("tags", ())
    )


class TestAccountType:
    """Tests for AccountType naming convention."""

    def test_asset_namespace(self):
        assert AccountType.for_name("asset/bank/checking") is AccountType.ASSET
        assert AccountType.for_name("asset") is AccountType.ASSET

    def test_everything_else_is_flow(self):
        assert AccountType.for_name("expense/food") is AccountType.FLOW
        assert AccountType.for_name("assets/bank") is AccountType.FLOW
        assert AccountType.for_name("splitwise/alice") is AccountType.FLOW


class TestAccount:
    """Tests for Account."""

    def test_new_account_has_no_transactions(self):
        account = Account("asset/bank", AccountType.ASSET)
        assert not account.has_transactions()
        assert account.transaction_ids == frozenset()

    def test_accepts_type_value(self):
        account = Account("expense/food", "flow")
        assert account.account_type is AccountType.FLOW

    @pytest.mark.parametrize("name", ["", "   ", " asset/bank"])
    def test_rejects_bad_names(self, name):
        with pytest.raises(ValidationError):
            Account(name, AccountType.ASSET)

    def test_index_add_and_remove(self):
        account = Account("asset/bank", AccountType.ASSET)
        account.add_transaction("abc")
        assert account.has_transaction("abc")
        account.remove_transaction("abc")
        assert not account.has_transactions()

    def test_remove_unknown_transaction(self):
        account = Account("asset/bank", AccountType.ASSET)
        with pytest.raises(AccountNotAssociatedWithTransaction):
            account.remove_transaction("abc")

    def test_index_not_part_of_equality(self):
        a = Account("asset/bank", AccountType.ASSET)
        b = Account("asset/bank", AccountType.ASSET)
        a.add_transaction("abc")
        assert a == b


class TestTransaction:
    """Tests for Transaction."""

    def test_from_strings(self):
        txn = _groceries()
        assert txn.account_names() == ["asset/bank", "expense/food"]
        assert txn.get_amount("asset/bank") == Amount.parse("-132 SEK")

    def test_get_amount_unknown_account(self):
        with pytest.raises(UnknownAccount):
            _groceries().get_amount("asset/cash")

    def test_amounts_are_read_only(self):
        txn = _groceries()
        with pytest.raises(TypeError):
            txn.amounts["asset/cash"] = Amount.parse("1 SEK")

    def test_rejects_no_postings(self):
        with pytest.raises(ValidationError):
            _groceries(amounts=[])

    def test_rejects_duplicate_account(self):
        with pytest.raises(ValidationError):
            _groceries(amounts=[("asset/bank", "-1 SEK"), ("asset/bank", "1 SEK")])

    def test_rejects_malformed_amount(self):
        with pytest.raises(ParseError):
            _groceries(amounts=[("asset/bank", "lots")])

    def test_id_is_sha256_hex(self):
        txn_id = _groceries().generate_id()
        assert len(txn_id) == 64
        assert all(c in "0123456789abcdef" for c in txn_id)

    def test_id_is_deterministic(self):
        assert _groceries().generate_id() == _groceries().generate_id()

    def test_id_ignores_posting_order(self):
        reordered = _groceries(amounts=[("expense/food", "-132 SEK"), ("asset/bank", "-132 SEK")])
        assert reordered.generate_id() == _groceries().generate_id()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": "Groceries!"},
            {"notes": "weekly"},
            {"datetime": DateTime.parse("2023-07-13")},
            {"amounts": [("asset/bank", "-133 SEK"), ("expense/food", "-133 SEK")]},
            {"tags": ["food"]},
        ],
    )
    def test_id_depends_on_content(self, overrides):
        assert _groceries(**overrides).generate_id() != _groceries().generate_id()

    def test_equal_transactions_hash_equal(self):
        assert _groceries() == _groceries()
        assert hash(_groceries()) == hash(_groceries())
