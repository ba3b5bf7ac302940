import logging
import os
from dotenv import load_dotenv

# Load environment variables from a .env file
load_dotenv()

# --- API Keys ---
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
PINECONE_API_KEY = os.getenv("PINECONE_API_KEY")
FIRECRAWL_API_KEY = os.getenv("FIRECRAWL_API_KEY")
# Sent when a key is unset so the SDK clients still construct; the service rejects it on first use.
PLACEHOLDER_API_KEY = "not-configured"

# --- Base Paths ---
PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))

# --- Pinecone ---
PINECONE_INDEX_NAME = os.getenv("PINECONE_INDEX_NAME", "company-data")
PINECONE_NAMESPACE = os.getenv("PINECONE_NAMESPACE", "aven")
PINECONE_HOST = os.getenv("PINECONE_HOST")  # optional host override

# The index was created at 3072 dims; every vector written or queried must match.
EMBEDDING_DIMENSION = int(os.getenv("EMBEDDING_DIMENSION", "3072"))

# --- Models (Gemini through its OpenAI-compatible endpoint) ---
CHAT_BASE_URL = os.getenv("CHAT_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai/")
CHAT_MODEL = os.getenv("CHAT_MODEL", "gemini-1.5-flash")
EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "text-embedding-004")
DEFAULT_MAX_TOKENS = 150
DEFAULT_TEMPERATURE = 0.7

# --- Retrieval ---
RETRIEVAL_TOP_K = int(os.getenv("RETRIEVAL_TOP_K", "8"))
MIN_SIMILARITY_SCORE = float(os.getenv("MIN_SIMILARITY_SCORE", "0.5"))

# --- Ingestion ---
FIRECRAWL_API_URL = os.getenv("FIRECRAWL_API_URL", "https://api.firecrawl.dev")
CHUNK_SIZE = 1000  # characters
RATE_LIMIT_INTERVAL = float(os.getenv("RATE_LIMIT_INTERVAL", "6.0"))  # 10 RPM
INGEST_BATCH_ID = os.getenv("INGEST_BATCH_ID", "aven-support")
INGEST_CATEGORY = "website"

SCRAPE_URLS = [
    "https://www.aven.com",
    "https://www.aven.com/home-equity-visa-card",
    "https://www.aven.com/home-equity-cash-card",
    "https://www.aven.com/rewards-visa-card",
    "https://www.aven.com/reviews",
    "https://www.aven.com/support",
    "https://www.aven.com/app",
    "https://www.aven.com/about",
    "https://www.aven.com/contact",
    "https://www.aven.com/blog",
    "https://www.aven.com/careers",
    "https://www.aven.com/press",
    "https://my.aven.com/login",
]

# --- Prompt Configuration ---
PROMPT_PATH = os.path.join(PACKAGE_DIR, "prompts.yml")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "[%(levelname)s] %(asctime)s - %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for name in ["httpx", "openai", "urllib3"]:
        logging.getLogger(name).setLevel(logging.WARNING)
