"""BDD tests for folding a guest cart into a customer's cart at sign-in."""

from carts.cart import service
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/guest_merge.feature")


@when(parsers.cfparse('the guest "{token}" signs in as "{user_id}"'))
def signs_in(token, user_id, outcome):
    outcome["merge"] = service.merge(token, user_id)


@then(parsers.cfparse("{count:d} lines were merged"))
def lines_merged(outcome, count):
    assert outcome["merge"].merged_lines == count
