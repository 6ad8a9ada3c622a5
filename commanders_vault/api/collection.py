"""
Collection API endpoints.

Forwards to the collection view of the caller's shell, opening the
collection tab first if another tab is showing.
"""

from typing import cast

from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from commanders_vault.api.deps import ShellDep
from commanders_vault.api.schemas import CardOut, UserCardOut
from commanders_vault.models.collection import CardDraft
from commanders_vault.views.collection import CollectionMode, CollectionView
from commanders_vault.views.shell import Shell, Tab

router = APIRouter(prefix="/collection", tags=["collection"])


class CollectionResponse(BaseModel):
    """The collection tab as the browser should render it."""

    loading: bool
    mode: CollectionMode
    search_term: str = ""
    cards: list[UserCardOut] = Field(
        default_factory=list,
        description="Owned cards matching the search term",
    )
    total_rows: int = Field(0, description="Owned rows before filtering")


class CardCreateRequest(BaseModel):
    """Fields of the "add card" form."""

    name: str = Field(..., min_length=1, examples=["Atraxa, Praetors' Voice"])
    type_line: str = Field(default="", examples=["Legendary Creature - Phyrexian Angel Horror"])
    mana_cost: str = Field(default="", examples=["{G}{W}{U}{B}"])
    colors: list[str] = Field(default_factory=list, examples=[["W", "U", "B", "G"]])
    color_identity: list[str] = Field(default_factory=list)
    is_legendary: bool = False


class CardCreatedResponse(BaseModel):
    card: CardOut
    collection: CollectionResponse


class ModeRequest(BaseModel):
    mode: CollectionMode


async def _collection_view(shell: Shell) -> CollectionView:
    return cast(CollectionView, await shell.open(Tab.COLLECTION))


def collection_response(view: CollectionView) -> CollectionResponse:
    return CollectionResponse(
        loading=view.loading,
        mode=view.mode,
        search_term=view.search_term,
        cards=[UserCardOut.model_validate(uc) for uc in view.filtered_cards],
        total_rows=len(view.user_cards),
    )


@router.get("", response_model=CollectionResponse)
async def get_collection(
    shell: ShellDep,
    search: str | None = Query(default=None, description="Case-insensitive name filter"),
) -> CollectionResponse:
    """
    Get the user's collection.

    Filtering happens on the list already loaded; it never re-queries.
    """
    view = await _collection_view(shell)
    if search is not None:
        view.search(search)
    return collection_response(view)


@router.post("/refresh", response_model=CollectionResponse)
async def refresh_collection(shell: ShellDep) -> CollectionResponse:
    view = await _collection_view(shell)
    await view.load_cards()
    return collection_response(view)


@router.put("/mode", response_model=CollectionResponse)
async def set_mode(request: ModeRequest, shell: ShellDep) -> CollectionResponse:
    """Open or close the "add card" form."""
    view = await _collection_view(shell)
    if request.mode is CollectionMode.ADDING_CARD:
        view.open_add_card()
    else:
        view.cancel_add_card()
    return collection_response(view)


@router.post("/cards", response_model=CardCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_card(request: CardCreateRequest, shell: ShellDep) -> CardCreatedResponse:
    """
    Create a card and add one copy to the collection.

    Adding a card the user already owns creates a second row rather than
    raising the quantity of the first.
    """
    view = await _collection_view(shell)
    card = await view.create_card(CardDraft(**request.model_dump()))
    return CardCreatedResponse(
        card=CardOut.model_validate(card),
        collection=collection_response(view),
    )
