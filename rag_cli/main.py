"""
Main Entry Point - rag-cli
==========================
Commands: ingest, query, list, clear, init, setup
Run: rag-cli <command> [options]   (or: python -m rag_cli.main)
"""

import argparse
import sys

from rag_cli import __version__
from rag_cli.core.config import settings
from rag_cli.core.errors import RAGError, VectorStoreUnavailableError
from rag_cli.core.logger import get_logger, set_level
from rag_cli.query_engine import RAGQueryEngine
from rag_cli.rag.chunker import CHUNK_OVERLAP, CHUNK_SIZE
from rag_cli.rag.vector_store_factory import create_collection

logger = get_logger(__name__)

PREVIEW_CHARS = 150

SETUP_TEXT = f"""
🚀 RAG CLI Setup Instructions
============================

1. Install and start Ollama:
   - Download from: https://ollama.com
   - Pull required models:
     ollama pull {settings.LLM_MODEL}
     ollama pull {settings.EMBEDDING_MODEL}

2. Install and start Chroma:

   Option A - Using Docker (Recommended):
   docker run -p 8000:8000 -v "$(pwd)/chroma_data:/data" chromadb/chroma

   Option B - Using the chromadb package:
   chroma run --path ./chroma_data --port 8000

3. Install rag-cli:
   pip install -e .

4. Create the collection (once):
   rag-cli init

5. Usage Examples:
   # Ingest a PDF
   rag-cli ingest ./document.pdf

   # Query the system
   rag-cli query "What is the main topic of the document?" -n 4

   # List ingested documents
   rag-cli list

   # Clear database
   rag-cli clear

📝 Prerequisites:
- Python 3.9+
- Ollama running on {settings.OLLAMA_BASE_URL}
- Chroma running on {settings.chroma_url}
- PDF files for ingestion

🔧 Configuration (environment variables or .env):
- Embedding model: {settings.EMBEDDING_MODEL} (EMBEDDING_MODEL)
- LLM model: {settings.LLM_MODEL} (LLM_MODEL)
- Chunk size: {CHUNK_SIZE} characters
- Chunk overlap: {CHUNK_OVERLAP} characters
- Chroma collection: {settings.COLLECTION_NAME} (COLLECTION_NAME)

Without a reachable Chroma collection every command runs against an
in-memory store that is discarded when the command exits.
"""


# ============================================================================
# COMMANDS
# ============================================================================

def cmd_ingest(args) -> int:
    with RAGQueryEngine() as engine:
        stats = engine.add_document(args.file)

    print("✅ PDF ingestion completed successfully!")
    print(f"📊 Total chunks stored: {stats['num_chunks']}")
    if not stats["persistent"]:
        print("⚠️  Stored in memory only; run 'rag-cli init' with Chroma running to persist.")
    return 0


def cmd_query(args) -> int:
    with RAGQueryEngine() as engine:
        answer = engine.query(args.question, top_k=args.num_results)

    print("\n📝 Answer:")
    print("=" * 50)
    print(answer.text)

    print("\n📚 Sources:")
    print("=" * 50)
    for idx, result in enumerate(answer.sources, 1):
        chunk = result.chunk
        page = chunk.page_number if chunk.page_number is not None else "Unknown"
        print(f"{idx}. Source: {chunk.source}")
        print(f"   Page: {page}")
        print(f"   Chunk: {chunk.chunk_id}")
        print(f"   Score: {result.score:.4f}")
        print(f"   Content preview: {chunk.text[:PREVIEW_CHARS]}...")
        print()
    return 0


def cmd_list(args) -> int:
    with RAGQueryEngine() as engine:
        stats = engine.get_stats()
    sources = stats["sources"]

    print("\n📚 Ingested Documents:")
    print("=" * 30)
    if not sources:
        print("No documents found in the database.")
    for idx, source in enumerate(sources, 1):
        print(f"{idx}. {source}")

    print(f"\nTotal unique documents: {len(sources)}")
    print(f"Total chunks: {stats['total_chunks']}")
    if not stats["persistent"]:
        print("⚠️  Chroma is not reachable; showing the empty in-memory store.")
    return 0


def cmd_clear(args) -> int:
    with RAGQueryEngine() as engine:
        engine.clear_all()
    print(f"✅ Collection '{settings.COLLECTION_NAME}' cleared successfully")
    return 0


def cmd_init(args) -> int:
    store = create_collection()
    print(f"✅ Collection '{store.collection_name}' is ready at {settings.chroma_url} "
          f"({store.count()} records)")
    return 0


def cmd_setup(args) -> int:
    print(SETUP_TEXT)
    return 0


# ============================================================================
# ARGUMENT PARSING
# ============================================================================

def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rag-cli",
        description="RAG (Retrieval Augmented Generation) CLI using Ollama and Chroma",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True

    ingest = subparsers.add_parser("ingest", help="Ingest a PDF file into the RAG system")
    ingest.add_argument("file", help="Path to the PDF file")
    ingest.set_defaults(func=cmd_ingest, action_name="during PDF ingestion")

    query = subparsers.add_parser("query", help="Query the RAG system")
    query.add_argument("question", help="Question to ask")
    query.add_argument(
        "-n", "--num-results",
        type=positive_int,
        default=settings.RETRIEVAL_TOP_K,
        help=f"Number of results to retrieve (default: {settings.RETRIEVAL_TOP_K})",
    )
    query.set_defaults(func=cmd_query, action_name="during query")

    list_cmd = subparsers.add_parser("list", help="List all ingested documents")
    list_cmd.set_defaults(func=cmd_list, action_name="listing documents")

    clear = subparsers.add_parser("clear", help="Clear the document database")
    clear.set_defaults(func=cmd_clear, action_name="clearing database")

    init = subparsers.add_parser("init", help="Create the Chroma collection if it is missing")
    init.set_defaults(func=cmd_init, action_name="creating collection")

    setup = subparsers.add_parser("setup", help="Display setup instructions")
    setup.set_defaults(func=cmd_setup, action_name="showing setup")

    return parser


# ============================================================================
# MAIN FUNCTION
# ============================================================================

def main(argv=None) -> int:
    """Run one command and return its exit code"""
    args = build_parser().parse_args(argv)

    if args.verbose:
        set_level("DEBUG")

    try:
        return args.func(args)

    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user\n")
        logger.warning("Interrupted by user")
        return 130

    except VectorStoreUnavailableError as e:
        logger.error(f"❌ Error {args.action_name}: {e}")
        print(f"❌ Error {args.action_name}: {e}")
        print("💡 Start (or restart) the Chroma service and run 'rag-cli init', then retry")
        return 1

    except (RAGError, ValueError, OSError) as e:
        logger.error(f"❌ Error {args.action_name}: {e}", exc_info=args.verbose)
        print(f"❌ Error {args.action_name}: {e}")
        return 1

    except Exception as e:
        logger.error(f"❌ Unexpected error {args.action_name}: {e}", exc_info=True)
        print(f"❌ Error {args.action_name}: {e}")
        return 1


# ============================================================================
# ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    sys.exit(main())
