"""
Wants API endpoints.

The command front-end: a chat integration (or anything else) posts raw
command text on behalf of a user and gets back the reply to show them.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from wantboard.models.failure import (
    ApiResponse,
    KnownError,
    create_known_failure,
    create_success,
    create_unknown_failure,
)
from wantboard.models.wants import SpaceState
from wantboard.services.container import WantBoardServices, get_services
from wantboard.services.summary_renderer import render_summary, summary_footer, summary_totals

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/spaces/{space_id}/wants", tags=["wants"])


class WantsCommandRequest(BaseModel):
    """Request model for a wants command."""

    raw_text: str = Field(
        ...,
        description="Command text: +/- operations, 'clear' or 'help'",
        examples=["+1 Lightning Bolt (M25, foil) -2 Opt (eld)"],
    )
    user_id: str = Field(..., min_length=1)
    display_name: str = Field(..., min_length=1)


class WantsCommandResponse(BaseModel):
    """Reply for the user who sent the command."""

    result_text: str
    changed: bool = Field(
        ...,
        description="True if the space's shared summary changed",
    )


class SummaryResponse(BaseModel):
    """Rendered wants summary for a space."""

    space_id: str
    text: str
    specifications: int = 0
    total_copies: int = 0
    footer: str = ""


class WantedCard(BaseModel):
    name: str
    edition: str | None = None
    foil: bool = False
    quantity: int


class UserWantsResponse(BaseModel):
    """One user's want list."""

    space_id: str
    user_id: str
    display_name: str
    cards: list[WantedCard] = Field(default_factory=list)


@router.post("", response_model=ApiResponse[WantsCommandResponse])
async def post_command(
    space_id: str,
    request: WantsCommandRequest,
    services: Annotated[WantBoardServices, Depends(get_services)],
) -> ApiResponse[Any]:
    """
    Run one wants command for a user.

    Per-operation failures are part of `result_text`. Only failures
    outside the command's own handling become an unknown failure.
    """
    try:
        result = await services.handler.handle(
            request.raw_text,
            user_id=request.user_id,
            display_name=request.display_name,
            space_id=space_id,
        )
    except KnownError as e:
        logger.warning("COMMAND_REJECTED", extra={"space_id": space_id, "kind": e.kind.value})
        return create_known_failure(e)
    except Exception as e:
        logger.exception("COMMAND_FAILED", extra={"space_id": space_id})
        return create_unknown_failure(e)

    return create_success(
        WantsCommandResponse(result_text=result.result_text, changed=result.changed)
    )


@router.get("", response_model=ApiResponse[SummaryResponse])
async def get_summary(
    space_id: str,
    services: Annotated[WantBoardServices, Depends(get_services)],
) -> ApiResponse[Any]:
    """Render the current summary. Unknown spaces render as empty."""
    space = services.store.get(space_id) or SpaceState()
    specifications, copies = summary_totals(space)

    return create_success(
        SummaryResponse(
            space_id=space_id,
            text=render_summary(space),
            specifications=specifications,
            total_copies=copies,
            footer=summary_footer(space),
        )
    )


@router.get("/{user_id}", response_model=ApiResponse[UserWantsResponse])
async def get_user_wants(
    space_id: str,
    user_id: str,
    services: Annotated[WantBoardServices, Depends(get_services)],
) -> ApiResponse[Any]:
    """Get one user's want list."""
    space = services.store.get(space_id)
    want_list = space.users.get(user_id) if space else None

    if want_list is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No wants list for user {user_id}",
        )

    cards = [
        WantedCard(name=card.name, edition=card.edition, foil=card.foil, quantity=quantity)
        for card, quantity in want_list.decoded_items()
    ]
    return create_success(
        UserWantsResponse(
            space_id=space_id,
            user_id=user_id,
            display_name=want_list.display_name,
            cards=cards,
        )
    )
