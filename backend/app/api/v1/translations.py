"""Post translation API router.

REST endpoints for translating a post into target languages and managing
the stored translations (list, publish toggle, delete).
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_session
from app.core.logging import get_logger
from app.repositories.post import PostRepository
from app.repositories.post_translation import PostTranslationRepository
from app.schemas.translation import (
    PostTranslationResponse,
    TranslatePostRequest,
    TranslatePostResponse,
    TranslationErrorResponse,
    TranslationOutcomeResponse,
    TranslationPublishUpdate,
)
from app.services.post_translation import (
    ClientFactory,
    PostTranslationService,
    TranslationError,
    TranslationRequest,
    create_llm_client,
)

logger = get_logger(__name__)

router = APIRouter(tags=["Translations"])


def get_client_factory() -> ClientFactory:
    """Dependency returning the provider client factory."""
    return create_llm_client


@router.post(
    "/translate-post",
    response_model=TranslatePostResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    responses={400: {"model": TranslationErrorResponse}},
)
async def translate_post(
    data: TranslatePostRequest,
    db: AsyncSession = Depends(get_session),
    client_factory: ClientFactory = Depends(get_client_factory),
) -> TranslatePostResponse | JSONResponse:
    """Translate a post into each requested language.

    Returns one result per language, in request order. A request that cannot
    start at all (unknown model, missing post, missing API key) answers 400.
    """
    request = TranslationRequest(
        post_id=data.post_id,
        target_languages=tuple(data.target_languages),
        provider=data.translation_provider,
        model=data.model,
        localization_notes=data.localization_notes,
    )
    service = PostTranslationService(db, client_factory=client_factory)

    try:
        outcomes = await service.translate_post(request)
    except TranslationError as e:
        logger.warning(
            "Translation request rejected",
            extra={
                "post_id": data.post_id,
                "provider": data.translation_provider,
                "error_type": type(e).__name__,
                "error_message": e.message,
            },
        )
        body = TranslationErrorResponse(error=e.message, details=e.details)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=body.model_dump(),
        )

    return TranslatePostResponse(
        results=[
            TranslationOutcomeResponse.model_validate(outcome.to_dict())
            for outcome in outcomes
        ]
    )


@router.get(
    "/posts/{post_id}/translations",
    response_model=list[PostTranslationResponse],
)
async def list_post_translations(
    post_id: str,
    db: AsyncSession = Depends(get_session),
) -> list[PostTranslationResponse]:
    """List all translations of a post."""
    post = await PostRepository(db).get_by_id(post_id)
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Post {post_id} not found",
        )

    translations = await PostTranslationRepository(db).list_for_post(post_id)
    return [PostTranslationResponse.model_validate(t) for t in translations]


@router.patch(
    "/translations/{translation_id}/published",
    response_model=PostTranslationResponse,
)
async def set_translation_published(
    translation_id: str,
    data: TranslationPublishUpdate,
    db: AsyncSession = Depends(get_session),
) -> PostTranslationResponse:
    """Publish or unpublish a translation."""
    repo = PostTranslationRepository(db)
    translation = await repo.get_by_id(translation_id)
    if translation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Translation {translation_id} not found",
        )

    translation = await repo.set_published(translation, data.published)
    return PostTranslationResponse.model_validate(translation)


@router.delete(
    "/translations/{translation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_translation(
    translation_id: str,
    db: AsyncSession = Depends(get_session),
) -> Response:
    """Delete a translation. The language can then be translated again."""
    deleted = await PostTranslationRepository(db).delete(translation_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Translation {translation_id} not found",
        )

    logger.info("Translation deleted", extra={"translation_id": translation_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
