"""Tests for domain models."""

from datetime import UTC, datetime

import pytest

from commanders_vault.models import (
    COMMANDER_DECK_SIZE,
    AuthError,
    Card,
    CardDraft,
    ColorBucket,
    Completeness,
    Deck,
    DeckCard,
    DeckFullError,
    FailureKind,
    OutcomeType,
    PersistenceError,
    UserCard,
    banner_for,
    can_add_card,
    color_bucket,
    completeness,
    deck_total,
    filter_by_name,
)
from commanders_vault.models.deck import COMPLETE_BANNER, INCOMPLETE_BANNER


def make_user_card(name: str, row_id: str = "uc-1") -> UserCard:
    return UserCard(
        id=row_id,
        user_id="user-1",
        card_id=f"card-{row_id}",
        card=Card(id=f"card-{row_id}", name=name),
    )


def make_deck_card(quantity: int, row_id: str = "dc-1") -> DeckCard:
    return DeckCard(id=row_id, deck_id="deck-1", card_id="card-1", quantity=quantity)


class TestColorBucket:
    @pytest.mark.parametrize(
        ("colors", "expected"),
        [
            (["W"], ColorBucket.WHITE),
            (["U"], ColorBucket.BLUE),
            (["B"], ColorBucket.BLACK),
            (["R"], ColorBucket.RED),
            (["G"], ColorBucket.GREEN),
            ([], ColorBucket.COLORLESS),
            (None, ColorBucket.COLORLESS),
        ],
    )
    def test_single_colors(self, colors: list[str] | None, expected: ColorBucket) -> None:
        assert color_bucket(colors) is expected

    def test_white_wins_over_everything(self) -> None:
        """W is checked first regardless of list order."""
        assert color_bucket(["G", "U", "B", "W"]) is ColorBucket.WHITE

    def test_blue_before_black(self) -> None:
        assert color_bucket(["B", "U"]) is ColorBucket.BLUE

    def test_unknown_symbols_are_colorless(self) -> None:
        assert color_bucket(["C", "X"]) is ColorBucket.COLORLESS

    def test_card_bucket_property(self) -> None:
        card = Card(id="c", name="Lightning Bolt", colors=["R"])
        assert card.bucket is ColorBucket.RED


class TestFilterByName:
    def test_case_insensitive_substring(self) -> None:
        cards = [
            make_user_card("Sol Ring", "1"),
            make_user_card("Solemn Simulacrum", "2"),
            make_user_card("Arcane Signet", "3"),
        ]

        result = filter_by_name(cards, "SOL")

        assert [uc.card.name for uc in result] == ["Sol Ring", "Solemn Simulacrum"]

    def test_empty_term_keeps_everything(self) -> None:
        cards = [make_user_card("Sol Ring", "1"), make_user_card("Arcane Signet", "2")]
        assert filter_by_name(cards, "") == cards

    def test_no_match(self) -> None:
        assert filter_by_name([make_user_card("Sol Ring")], "xyz") == []

    def test_rows_without_card_never_match(self) -> None:
        orphan = UserCard(id="uc", user_id="u", card_id="c", card=None)
        assert filter_by_name([orphan], "") == []

    def test_preserves_order(self) -> None:
        cards = [make_user_card("Beast Within", "1"), make_user_card("Animal Within", "2")]
        assert [uc.id for uc in filter_by_name(cards, "within")] == ["1", "2"]


class TestDeckCompleteness:
    def test_deck_size_is_one_hundred(self) -> None:
        assert COMMANDER_DECK_SIZE == 100

    def test_total_counts_quantities(self) -> None:
        cards = [make_deck_card(1, "a"), make_deck_card(30, "b"), make_deck_card(2, "c")]
        assert deck_total(cards) == 33

    @pytest.mark.parametrize(
        ("total", "state", "banner"),
        [
            (0, Completeness.EMPTY, None),
            (1, Completeness.INCOMPLETE, INCOMPLETE_BANNER),
            (99, Completeness.INCOMPLETE, INCOMPLETE_BANNER),
            (100, Completeness.COMPLETE, COMPLETE_BANNER),
        ],
    )
    def test_states(self, total: int, state: Completeness, banner: str | None) -> None:
        assert completeness(total) is state
        assert banner_for(total) == banner

    def test_can_add_below_limit_only(self) -> None:
        assert can_add_card(0)
        assert can_add_card(99)
        assert not can_add_card(100)
        assert not can_add_card(101)


class TestRowParsing:
    def test_card_from_row_defaults(self) -> None:
        card = Card.from_row({"id": 7, "name": "Sol Ring", "colors": None})

        assert card.id == "7"
        assert card.colors == []
        assert card.is_legendary is False

    def test_card_from_row_datetime(self) -> None:
        created = datetime(2024, 1, 1, tzinfo=UTC)
        card = Card.from_row({"id": "c", "name": "Sol Ring", "created_at": created})
        assert card.created_at == created.isoformat()

    def test_user_card_with_embedded_card(self) -> None:
        row = {
            "id": "uc-1",
            "user_id": "u-1",
            "card_id": "c-1",
            "quantity": 2,
            "cards": {"id": "c-1", "name": "Cultivate", "colors": ["G"]},
        }

        user_card = UserCard.from_row(row)

        assert user_card.quantity == 2
        assert user_card.card is not None
        assert user_card.card.name == "Cultivate"

    def test_deck_without_commander(self) -> None:
        deck = Deck.from_row({"id": "d", "user_id": "u", "name": "Elves", "cards": None})

        assert deck.commander is None
        assert deck.commander_id is None

    def test_deck_with_commander(self) -> None:
        row = {
            "id": "d",
            "user_id": "u",
            "name": "Superfriends",
            "commander_id": "c",
            "cards": {"id": "c", "name": "Atraxa, Praetors' Voice", "is_legendary": True},
        }

        deck = Deck.from_row(row)

        assert deck.commander is not None
        assert deck.commander.is_legendary

    def test_card_draft_row_has_only_form_fields(self) -> None:
        draft = CardDraft(name="Sol Ring", mana_cost="{1}")

        assert set(draft.to_row()) == {
            "name",
            "type_line",
            "mana_cost",
            "colors",
            "color_identity",
            "is_legendary",
        }


class TestFailures:
    def test_deck_full_is_a_refusal(self) -> None:
        error = DeckFullError(100)
        response = error.to_response()

        assert error.status_code == 409
        assert response.outcome is OutcomeType.REFUSAL
        assert response.failure is not None
        assert response.failure.kind is FailureKind.DECK_SIZE_VIOLATION
        assert response.failure.message == "Commander decks must have exactly 100 cards!"

    def test_persistence_error_is_known_failure(self) -> None:
        response = PersistenceError("permission denied").to_response()

        assert response.outcome is OutcomeType.KNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.message == "permission denied"

    def test_auth_error_status(self) -> None:
        """Sign-in rejections default to 401; callers can mark bad input as 400."""
        assert AuthError("Invalid login credentials").status_code == 401
        rejected = AuthError("User already registered", status_code=400)

        assert rejected.status_code == 400
        failure = rejected.to_response().failure
        assert failure is not None
        assert failure.kind is FailureKind.AUTH_FAILED
