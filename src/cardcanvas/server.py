"""HTTP endpoints for card rendering."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, field_validator

from cardcanvas import __version__
from cardcanvas.cards import SatireNewsCard
from cardcanvas.config import Config, load_config
from cardcanvas.errors import ConfigError, EncodeError, LoadError
from cardcanvas.fonts import register_fonts
from cardcanvas.render.image import ImageLoader, ImageLoaderFunc, is_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/canvas", tags=["canvas"])


class SatireNewsParams(BaseModel):
    """Parameters of the satire news endpoint (query string or JSON body)."""

    headline: str | None = None
    name: str | None = None
    pfp: str | None = None
    bg: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _stringify(cls, value: object) -> object:
        # JSON bodies may carry numbers or booleans; treat them as their text
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        return value


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "timestamp": _timestamp()})


def render_satire_news(params: SatireNewsParams, loader: ImageLoaderFunc) -> Response:
    """
    Validate parameters, render the card and map failures to JSON errors.

    ConfigError maps to 400, LoadError to 502, anything else to 500.
    """
    if not params.headline or not params.name or not params.pfp:
        return error_response(400, "Missing required parameters: headline, name, pfp")

    if not is_url(params.pfp):
        return error_response(400, "Invalid pfp URL")

    bg = params.bg or params.pfp
    if not is_url(bg):
        return error_response(400, "Invalid bg URL")

    card = SatireNewsCard(headline=params.headline, name=params.name, avatar=params.pfp, background=bg)
    try:
        png = card.to_png(loader)
    except ConfigError as e:
        return error_response(400, str(e))
    except LoadError as e:
        logger.warning(f"Image load failed for satire news card: {e}")
        return error_response(502, str(e))
    except EncodeError as e:
        logger.error(f"PNG encoding failed: {e}")
        return error_response(500, str(e))
    except Exception as e:
        logger.exception("Unexpected error rendering satire news card")
        return error_response(500, str(e) or "Internal server error")

    return Response(content=png, media_type="image/png")


@router.get("/snews")
def satire_news_get(
    request: Request,
    headline: str | None = None,
    name: str | None = None,
    pfp: str | None = None,
    bg: str | None = None,
) -> Response:
    params = SatireNewsParams(headline=headline, name=name, pfp=pfp, bg=bg)
    return render_satire_news(params, request.app.state.loader)


@router.post("/snews")
def satire_news_post(request: Request, payload: SatireNewsParams | None = None) -> Response:
    return render_satire_news(payload or SatireNewsParams(), request.app.state.loader)


def create_app(config: Config | None = None, loader: ImageLoaderFunc | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Configuration; loaded from ./cardcanvas.toml (or defaults) when None.
        loader: Image loader override, mainly for tests.

    Returns:
        Configured FastAPI app.
    """
    config = config or load_config()

    register_fonts()
    if config.fonts.fonts_dir:
        register_fonts(config.fonts.fonts_dir)

    app = FastAPI(title="cardcanvas", version=__version__)
    app.state.config = config
    app.state.loader = loader or ImageLoader(config.fetch)
    app.include_router(router)

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
        return error_response(400, "Invalid request parameters")

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
