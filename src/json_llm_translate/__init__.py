"""json-llm-translate: Translate JSON files of any size using OpenAI."""

__version__ = "0.1.0"

from .analyzer import FileAnalysis, analyze_content, subdivide_chunk
from .chunks import Chunk, TranslationResult, build_chunks
from .client import CompletionClient, create_client
from .executor import ChunkTranslator
from .style_guide import StyleGuide, load_style_guide
from .translator import JsonTranslator
from .utils import derive_output_path, find_missing_translations, merge_translations

__all__ = [
    "__version__",
    "Chunk",
    "ChunkTranslator",
    "CompletionClient",
    "FileAnalysis",
    "JsonTranslator",
    "StyleGuide",
    "TranslationResult",
    "analyze_content",
    "build_chunks",
    "create_client",
    "derive_output_path",
    "find_missing_translations",
    "load_style_guide",
    "merge_translations",
    "subdivide_chunk",
]
