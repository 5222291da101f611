"""API routes for Referent."""

from fastapi import APIRouter, HTTPException, status

from referent import __version__
from referent.api.models import (
    HealthResponse,
    ImageRequest,
    ImageResponse,
    ParseRequest,
    ParseResponse,
    ProcessRequest,
    ProcessResponse,
    TranslateRequest,
    TranslateResponse,
)
from referent.clients.gemini import GeminiClient
from referent.clients.html import HtmlFetcher
from referent.clients.huggingface import HuggingFaceImageClient
from referent.clients.openrouter import OpenRouterClient
from referent.config import Settings, get_huggingface_api_key, get_openrouter_api_key, get_settings
from referent.errors import (
    ConfigurationError,
    ErrorKind,
    InvalidInputError,
    ProviderError,
    ReferentError,
    UpstreamHttpError,
)
from referent.services.article import ArticleService
from referent.services.generation import GenerationService, parse_kind
from referent.services.illustration import IllustrationService
from referent.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["api"])

ERROR_STATUS = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorKind.SERVER_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.MODEL_LOADING: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.EMPTY_RESULT: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.NETWORK_ERROR: status.HTTP_502_BAD_GATEWAY,
}


def error_status(error: ReferentError) -> int:
    """Choose the HTTP status that reports an error to the client."""
    if error.kind in ERROR_STATUS:
        return ERROR_STATUS[error.kind]
    if isinstance(error, (UpstreamHttpError, ProviderError)) and 400 <= error.status_code < 600:
        return error.status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def to_http_exception(error: ReferentError) -> HTTPException:
    """Translate a ReferentError into an HTTPException with a structured body."""
    detail: dict[str, object] = {"error": error.message, "error_type": error.kind.value}
    if isinstance(error, (UpstreamHttpError, ProviderError)):
        detail["status"] = error.status_code
    return HTTPException(status_code=error_status(error), detail=detail)


def _text_provider(settings: Settings) -> OpenRouterClient | GeminiClient:
    if settings.text_provider == "gemini":
        if not settings.gcp_project_id:
            raise ConfigurationError("REFERENT_GCP_PROJECT_ID is required for Gemini")
        return GeminiClient(
            project_id=settings.gcp_project_id,
            region=settings.gcp_region,
            model_name=settings.gemini_model,
        )
    return OpenRouterClient(
        api_key=get_openrouter_api_key(settings),
        model=settings.openrouter_model,
        base_url=settings.openrouter_base_url,
        app_url=settings.app_url,
        app_title=settings.app_title,
        timeout=settings.generation_timeout,
    )


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@router.post("/parse", response_model=ParseResponse)
async def parse(request: ParseRequest) -> ParseResponse:
    """Fetch an article page and extract its title, date and content."""
    logger.info("Parse endpoint called", url=request.url)
    settings = get_settings()

    try:
        async with HtmlFetcher(timeout=settings.fetch_timeout) as fetcher:
            article = await ArticleService(fetcher).extract(request.url)
    except ReferentError as e:
        raise to_http_exception(e) from e

    return ParseResponse(date=article.published_at_iso, title=article.title, content=article.body)


@router.post("/process", response_model=ProcessResponse)
async def process(request: ProcessRequest) -> ProcessResponse:
    """Generate a summary, theses list or social post from article text."""
    logger.info("Process endpoint called", action=request.action, text_length=len(request.text))
    settings = get_settings()

    try:
        kind = parse_kind(request.action)
        if not request.text.strip():
            raise InvalidInputError("Text is required")
        async with _text_provider(settings) as provider:
            service = GenerationService(
                provider,
                timeout=settings.generation_timeout,
                language=settings.target_language,
            )
            result = await service.generate(kind, request.text, request.source_url)
    except ReferentError as e:
        raise to_http_exception(e) from e

    return ProcessResponse(result=result)


@router.post("/translate", response_model=TranslateResponse)
async def translate(request: TranslateRequest) -> TranslateResponse:
    """Translate article text into the configured language."""
    logger.info("Translate endpoint called", text_length=len(request.text))
    settings = get_settings()

    try:
        if not request.text.strip():
            raise InvalidInputError("Text is required")
        async with _text_provider(settings) as provider:
            service = GenerationService(
                provider,
                timeout=settings.generation_timeout,
                language=settings.target_language,
            )
            translation = await service.translate(request.text)
    except ReferentError as e:
        raise to_http_exception(e) from e

    return TranslateResponse(translation=translation)


@router.post("/generate-image", response_model=ImageResponse)
async def generate_image(request: ImageRequest) -> ImageResponse:
    """Generate an illustration, trying image models in rank order."""
    logger.info("Image endpoint called", prompt_length=len(request.prompt))
    settings = get_settings()

    try:
        if not request.prompt.strip():
            raise InvalidInputError("Prompt is required")
        async with HuggingFaceImageClient(
            api_key=get_huggingface_api_key(settings),
            timeout=settings.image_timeout,
        ) as client:
            service = IllustrationService(
                client,
                settings.image_models,
                candidate_timeout=settings.image_timeout,
            )
            image = await service.generate_image(request.prompt)
    except ReferentError as e:
        raise to_http_exception(e) from e

    return ImageResponse(image=image.data_url, mime_type=image.mime_type, model=image.model)
