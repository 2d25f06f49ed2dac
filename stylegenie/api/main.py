"""FastAPI entrypoint and HTTP routes."""

import re
from pathlib import Path
from typing import Any, Optional

from fastapi import Body, Depends, FastAPI, Header, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from stylegenie.api.schemas import CombinationsRequest, DetectRequest, OutfitRequest, SuggestionsRequest
from stylegenie.catalog.garment import Garment, InvalidGarmentError
from stylegenie.catalog.tagging import TaggingGateway
from stylegenie.config.settings import get_settings
from stylegenie.metrics.prometheus_exporter import render_latest
from stylegenie.monitoring.logging import configure_logging
from stylegenie.recommender.combinations import CombinationGenerator
from stylegenie.recommender.suggestions import SuggestionGenerator
from stylegenie.services.looks import LookService, build_look
from stylegenie.services.outfit import IncompleteWardrobeError, OutfitOrchestrator, OutfitPreferences
from stylegenie.storage.cache import JsonFileSessionStore, SessionStore, WardrobeCache

_SESSION_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")
DEFAULT_SESSION = "default"


def get_session_store(
    x_session_id: Optional[str] = Header(default=None, alias="X-Session-Id"),
) -> SessionStore:
    """Return the file-backed store for the caller's browsing session."""

    session_id = x_session_id or DEFAULT_SESSION
    if not _SESSION_ID.match(session_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid session id.")
    return JsonFileSessionStore(Path(get_settings().cache_root) / session_id)


def get_gateway(request: Request) -> TaggingGateway:
    return request.app.state.gateway


def get_cache(store: SessionStore = Depends(get_session_store)) -> WardrobeCache:
    settings = get_settings()
    return WardrobeCache(store, ttl_seconds=settings.cache_ttl_seconds, history_limit=settings.history_limit)


def get_look_service(store: SessionStore = Depends(get_session_store)) -> LookService:
    return LookService(store)


def get_combination_generator() -> CombinationGenerator:
    return CombinationGenerator(limit=get_settings().max_combinations)


def create_app() -> FastAPI:
    """Initialise the FastAPI application."""

    configure_logging()
    settings = get_settings()
    app = FastAPI(
        title="StyleGenie API",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
    )
    app.state.gateway = TaggingGateway()
    suggestion_generator = SuggestionGenerator()

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.get("/metrics", tags=["system"])
    async def metrics() -> Response:
        body, content_type = render_latest()
        return Response(content=body, media_type=content_type)

    @app.post("/api/detect", tags=["garments"])
    async def detect(body: DetectRequest, gateway: TaggingGateway = Depends(get_gateway)) -> Any:
        """Tag a garment image; degrades to fallback tags instead of failing."""

        if not body.image:
            return JSONResponse({"error": "No image provided"}, status_code=status.HTTP_400_BAD_REQUEST)
        result = await gateway.detect(body.image)
        return result.to_payload()

    @app.post("/api/combinations", tags=["outfits"])
    async def combinations(
        body: CombinationsRequest,
        generator: CombinationGenerator = Depends(get_combination_generator),
    ) -> dict[str, Any]:
        try:
            garments = [Garment.from_payload(item) for item in body.garments]
        except InvalidGarmentError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
        return {"combinations": [combination.to_payload() for combination in generator.generate(garments)]}

    @app.post("/api/suggestions", tags=["outfits"])
    async def suggestions(body: SuggestionsRequest) -> dict[str, Any]:
        return {
            "suggestions": [
                suggestion.to_payload() for suggestion in suggestion_generator.suggest(body.type, body.color)
            ]
        }

    @app.post("/api/outfits", tags=["outfits"])
    async def build_outfit(
        body: OutfitRequest,
        gateway: TaggingGateway = Depends(get_gateway),
        cache: WardrobeCache = Depends(get_cache),
        generator: CombinationGenerator = Depends(get_combination_generator),
    ) -> dict[str, Any]:
        orchestrator = OutfitOrchestrator(
            gateway,
            cache,
            combination_generator=generator,
            suggestion_generator=suggestion_generator,
        )
        try:
            plan = await orchestrator.build_outfit(
                body.wardrobe(),
                OutfitPreferences.from_payload(body.preferences),
            )
        except IncompleteWardrobeError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
        return plan.to_payload()

    @app.get("/api/outfits/current", tags=["outfits"])
    async def current_outfit(cache: WardrobeCache = Depends(get_cache)) -> dict[str, Any]:
        combination = cache.load_combination()
        if combination is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No active combination.")
        return combination

    @app.get("/api/outfits/history", tags=["outfits"])
    async def outfit_history(cache: WardrobeCache = Depends(get_cache)) -> dict[str, Any]:
        return {"history": cache.history()}

    @app.get("/api/wardrobe", tags=["wardrobe"])
    async def wardrobe(cache: WardrobeCache = Depends(get_cache)) -> dict[str, Any]:
        return {"wardrobe": cache.load_wardrobe()}

    @app.delete("/api/wardrobe", tags=["wardrobe"], status_code=status.HTTP_204_NO_CONTENT)
    async def clear_wardrobe(cache: WardrobeCache = Depends(get_cache)) -> Response:
        cache.clear_wardrobe()
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.delete("/api/cache", tags=["wardrobe"], status_code=status.HTTP_204_NO_CONTENT)
    async def clear_cache(cache: WardrobeCache = Depends(get_cache)) -> Response:
        cache.clear_all()
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.post("/api/save-look", tags=["looks"])
    async def save_look(
        look: dict[str, Any] = Body(...),
        service: LookService = Depends(get_look_service),
    ) -> Any:
        result = await service.save(look)
        if not result.success:
            return JSONResponse(result.to_payload(), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return result.to_payload()

    @app.post("/api/outfits/current/save", tags=["looks"])
    async def save_current_outfit(
        cache: WardrobeCache = Depends(get_cache),
        service: LookService = Depends(get_look_service),
    ) -> Any:
        combination = cache.load_combination()
        if combination is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No active combination.")
        result = await service.save(build_look(combination))
        if not result.success:
            return JSONResponse(result.to_payload(), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return result.to_payload()

    @app.get("/api/looks", tags=["looks"])
    async def list_looks(service: LookService = Depends(get_look_service)) -> dict[str, Any]:
        return {"looks": service.list_looks()}

    @app.delete("/api/looks/{look_id}", tags=["looks"], status_code=status.HTTP_204_NO_CONTENT)
    async def delete_look(look_id: str, service: LookService = Depends(get_look_service)) -> Response:
        if not service.delete(look_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Look not found.")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


app = create_app()
