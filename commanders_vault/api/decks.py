"""
Deck API endpoints.

Forwards to the deck builder view of the caller's shell, opening the decks
tab first if another tab is showing.
"""

from typing import cast

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from commanders_vault.api.deps import ShellDep
from commanders_vault.api.schemas import CardOut, DeckCardOut, DeckOut
from commanders_vault.models.deck import COMMANDER_DECK_SIZE, Completeness
from commanders_vault.models.failure import PersistenceError
from commanders_vault.views.deck_builder import DeckBuilderMode, DeckBuilderView
from commanders_vault.views.shell import Shell, Tab

router = APIRouter(prefix="/decks", tags=["decks"])


class DeckBuilderResponse(BaseModel):
    """The decks tab as the browser should render it."""

    loading: bool
    mode: DeckBuilderMode
    decks: list[DeckOut] = Field(default_factory=list)
    selected_deck_id: str | None = None
    deck_cards: list[DeckCardOut] = Field(default_factory=list)
    available_cards: list[CardOut] = Field(default_factory=list)
    card_count: int = 0
    deck_size: int = COMMANDER_DECK_SIZE
    completeness: Completeness = Completeness.EMPTY
    banner: str | None = None
    can_add_cards: bool = False


class DeckCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, examples=["Atraxa Superfriends"])


class SelectionRequest(BaseModel):
    deck_id: str


class AddCardRequest(BaseModel):
    card_id: str


class ModeRequest(BaseModel):
    mode: DeckBuilderMode


async def _deck_view(shell: Shell) -> DeckBuilderView:
    return cast(DeckBuilderView, await shell.open(Tab.DECKS))


def deck_builder_response(view: DeckBuilderView) -> DeckBuilderResponse:
    return DeckBuilderResponse(
        loading=view.loading,
        mode=view.mode,
        decks=[DeckOut.model_validate(d) for d in view.decks],
        selected_deck_id=view.selected_deck_id,
        deck_cards=[DeckCardOut.model_validate(dc) for dc in view.deck_cards],
        available_cards=[CardOut.model_validate(c) for c in view.available_cards],
        card_count=view.card_count,
        completeness=view.completeness,
        banner=view.banner,
        can_add_cards=view.can_add_cards,
    )


@router.get("", response_model=DeckBuilderResponse)
async def get_decks(shell: ShellDep) -> DeckBuilderResponse:
    """Get the user's decks (newest first) and the selected deck's cards."""
    view = await _deck_view(shell)
    return deck_builder_response(view)


@router.post("", response_model=DeckBuilderResponse, status_code=status.HTTP_201_CREATED)
async def create_deck(request: DeckCreateRequest, shell: ShellDep) -> DeckBuilderResponse:
    """Create an empty deck. It is not selected automatically."""
    view = await _deck_view(shell)
    if await view.create_deck(request.name) is None:
        raise PersistenceError("Could not create the deck")
    return deck_builder_response(view)


@router.delete("/{deck_id}", response_model=DeckBuilderResponse)
async def delete_deck(deck_id: str, shell: ShellDep) -> DeckBuilderResponse:
    """Delete a deck and its cards."""
    view = await _deck_view(shell)
    if not await view.delete_deck(deck_id):
        raise PersistenceError("Could not delete the deck")
    return deck_builder_response(view)


@router.put("/mode", response_model=DeckBuilderResponse)
async def set_mode(request: ModeRequest, shell: ShellDep) -> DeckBuilderResponse:
    """
    Open the create-deck or add-card dialog, or close whichever is open.

    The add-card dialog does not open while the selected deck is full.
    """
    view = await _deck_view(shell)
    if request.mode is DeckBuilderMode.CREATING_DECK:
        view.open_create_deck()
    elif request.mode is DeckBuilderMode.ADDING_CARD:
        view.open_add_card()
    else:
        view.close_dialog()
    return deck_builder_response(view)


@router.put("/selection", response_model=DeckBuilderResponse)
async def select_deck(request: SelectionRequest, shell: ShellDep) -> DeckBuilderResponse:
    view = await _deck_view(shell)
    await view.select_deck(request.deck_id)
    return deck_builder_response(view)


@router.post(
    "/selection/cards",
    response_model=DeckBuilderResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_card(request: AddCardRequest, shell: ShellDep) -> DeckBuilderResponse:
    """
    Add one copy of a card to the selected deck.

    Returns 409 once the deck holds 100 cards.
    """
    view = await _deck_view(shell)
    await view.add_card_to_deck(request.card_id)
    return deck_builder_response(view)


@router.delete("/selection/cards/{deck_card_id}", response_model=DeckBuilderResponse)
async def remove_card(deck_card_id: str, shell: ShellDep) -> DeckBuilderResponse:
    view = await _deck_view(shell)
    if not await view.remove_card_from_deck(deck_card_id):
        raise PersistenceError("Could not remove the card")
    return deck_builder_response(view)
