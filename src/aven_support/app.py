import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse

# --- Local Imports ---
from aven_support.config import configure_logging
from aven_support.core.embeddings import EmbeddingClient
from aven_support.core.errors import (
    AssistantError,
    IndexConfigurationError,
    InternalError,
    RequestValidationError,
    ServiceUnavailableError,
)
from aven_support.core.llm_client import build_async_client
from aven_support.rag.completion import CompletionForwarder
from aven_support.rag.rag_pipeline import RagPipeline
from aven_support.rag.request_validator import validate_chat_request
from aven_support.rag.retriever import Retriever
from aven_support.rag.vector_store import PineconeVectorStore

logger = logging.getLogger(__name__)

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


async def build_pipeline() -> RagPipeline:
    """Construct every service adapter once and wire them together."""
    client = build_async_client()
    vector_store = PineconeVectorStore()
    try:
        await asyncio.to_thread(vector_store.validate_dimension)
    except IndexConfigurationError:
        raise
    except AssistantError as err:
        # Credentials are not checked at startup; requests report the upstream status.
        logger.warning("Skipping index dimension check: %s", err.message)
    retriever = Retriever(embedder=EmbeddingClient(client=client), vector_store=vector_store)
    return RagPipeline(retriever=retriever, forwarder=CompletionForwarder(client=client))


def get_pipeline(request: Request) -> RagPipeline:
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        raise ServiceUnavailableError("RAG pipeline not initialized.")
    return pipeline


async def assistant_error_handler(request: Request, exc: AssistantError) -> JSONResponse:
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


def create_app(pipeline: RagPipeline | None = None) -> FastAPI:
    # --- Startup/Shutdown Lifespan ---
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "pipeline", None) is None:
            logger.info("Application startup: Initializing RAG Pipeline...")
            app.state.pipeline = await build_pipeline()
        yield
        logger.info("Application shutdown.")

    app = FastAPI(lifespan=lifespan)
    app.state.pipeline = pipeline

    # --- CORS Middleware ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AssistantError, assistant_error_handler)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.post("/api/chat/completions")
    async def chat_completions(request: Request, rag: RagPipeline = Depends(get_pipeline)):
        try:
            body = await request.json()
        except ValueError as err:  # malformed JSON or undecodable bytes
            raise RequestValidationError("Request body must be valid JSON") from err

        chat_request = validate_chat_request(body)

        try:
            if chat_request.stream:
                frames = await rag.answer_stream(chat_request)
                return StreamingResponse(frames, media_type="text/event-stream", headers=STREAM_HEADERS)
            completion = await rag.answer(chat_request)
            return JSONResponse(completion, status_code=200)
        except AssistantError as err:
            logger.error("Chat completion error: %s", err.message)
            raise
        except Exception as err:
            logger.exception("Chat completion error")
            raise InternalError(str(err) or "Unknown error occurred") from err

    return app


configure_logging()
app = create_app()
