"""Cart application service: the entry points the API and other callers use.

Writes take the owner lock, dispatch a command synchronously and translate
store failures into ``StoreUnavailable``. Reads take no lock.
"""

from contextlib import contextmanager

from protean.exceptions import (
    DatabaseError,
    ExpectedVersionError,
    TransactionError,
    ValidationError,
)
from protean.utils.globals import current_domain
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from carts import settings
from carts.cart.cart import Cart
from carts.cart.locks import owner_locks
from carts.cart.merge import DiscardCart, MergeGuestCart, MergeOutcome
from carts.cart.mutation import build_command
from carts.cart.projection import CartSnapshot, CartTotals, project_cart, snapshot_cart
from carts.catalog import get_catalog
from carts.errors import CartError, StoreUnavailable
from carts.owner import CartOwner
from carts.utils.logging import get_logger

logger = get_logger(__name__)

STORE_FAILURES = (DatabaseError, TransactionError, ExpectedVersionError, ConnectionError, TimeoutError)

DISCARD_ATTEMPTS = 3


@contextmanager
def _translated(owner_key: str, operation: str):
    try:
        yield
    except CartError as exc:
        logger.warning("Cart operation rejected", owner_key=owner_key, operation=operation, code=exc.code, detail=exc.detail)
        raise
    except ValidationError as exc:
        logger.warning("Cart operation invalid", owner_key=owner_key, operation=operation, errors=exc.messages)
        raise
    except STORE_FAILURES as exc:
        logger.error(
            "Cart store unavailable",
            owner_key=owner_key,
            operation=operation,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        raise StoreUnavailable(f"Cart store unavailable during {operation}") from exc


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------
def mutate(owner: CartOwner, operation, payload=None) -> CartSnapshot:
    """Apply one add / update / remove / clear to ``owner``'s cart."""
    op_name = getattr(operation, "value", operation)
    with _translated(owner.key, str(op_name)):
        command = build_command(owner, operation, payload)
        with owner_locks.hold(owner.key):
            cart = current_domain.process(command, asynchronous=False)

    snapshot = snapshot_cart(cart, get_catalog())
    logger.info(
        "Cart mutated",
        owner_key=owner.key,
        operation=op_name,
        product_id=(payload or {}).get("product_id"),
        item_count=snapshot.item_count,
    )
    return snapshot


def _log_discard_retry(retry_state):
    logger.warning(
        "Retrying guest cart discard",
        attempt=retry_state.attempt_number,
        owner_key=retry_state.args[0].key if retry_state.args else None,
    )


@retry(
    stop=stop_after_attempt(DISCARD_ATTEMPTS),
    wait=wait_exponential(multiplier=0.05, max=1),
    retry=retry_if_exception_type(StoreUnavailable),
    before_sleep=_log_discard_retry,
    reraise=True,
)
def _discard_guest_cart(guest: CartOwner) -> bool:
    with _translated(guest.key, "discard"):
        return current_domain.process(DiscardCart(owner_key=guest.key), asynchronous=False)


def merge(guest_token: str, user_id: str) -> MergeOutcome:
    """Fold a guest cart into a customer's cart at sign-in.

    Safe to call more than once for the same guest token: once the guest cart
    has been folded, later calls find a tombstone or nothing at all and leave
    the customer's cart alone.
    """
    with _translated(f"guest:{guest_token}", "merge"):
        guest = CartOwner.guest(guest_token)
        user = CartOwner.user(user_id)

        with owner_locks.hold(guest.key, user.key):
            result = current_domain.process(
                MergeGuestCart(guest_owner_key=guest.key, user_owner_key=user.key),
                asynchronous=False,
            )
            if not result["guest_found"]:
                logger.info("No guest cart to merge", guest_owner_key=guest.key, user_owner_key=user.key)
                return MergeOutcome(merged_lines=0, guest_discarded=False)

            try:
                discarded = _discard_guest_cart(guest)
            except StoreUnavailable:
                # The tombstone stays; the next merge or guest mutation removes it
                logger.warning("Guest cart tombstone kept", guest_owner_key=guest.key, attempts=DISCARD_ATTEMPTS)
                discarded = False

    logger.info(
        "Guest cart merged",
        guest_owner_key=guest.key,
        user_owner_key=user.key,
        merged_lines=result["merged_lines"],
        already_merged=result["already_merged"],
        guest_discarded=discarded,
    )
    return MergeOutcome(merged_lines=result["merged_lines"], guest_discarded=discarded)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
def load(owner: CartOwner) -> Cart:
    """The owner's cart as stored, or an empty unsaved one."""
    with _translated(owner.key, "read"):
        return current_domain.repository_for(Cart).peek(owner)


def snapshot(owner: CartOwner) -> CartSnapshot:
    return snapshot_cart(load(owner), get_catalog())


def project(owner: CartOwner) -> CartTotals:
    cart = load(owner)
    with _translated(owner.key, "project"):
        return project_cart(cart, get_catalog(), settings.shipping_fee())


def item_count(owner: CartOwner) -> int:
    return load(owner).item_count
