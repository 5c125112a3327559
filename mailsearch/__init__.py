"""In-process search and relevance ranking for mail messages.

Main components:
- SearchEngine: index ownership, ranked and highlighted search
- SearchIndex / IndexBuilder: rebuild-on-demand token index
- RelevanceScorer: weighted token, phrase and recency scoring
- Highlighter / SummaryGenerator: marked snippets and summaries
- SimilarityEngine: Jaccard similarity between messages
- QueryClassifier: query categories and typed terms
- InsightsAggregator / QueryHistory: usage statistics over past queries
"""

from .classifier import QueryClassifier
from .config import FieldWeights, SearchConfig, load_config
from .engine import SearchEngine, create_engine
from .exceptions import ConfigError, HistoryError, IndexBuildError, SearchError
from .extractors import extract_entities
from .highlighting import Highlighter, SummaryGenerator
from .history import QueryHistory
from .indexing import IndexBuilder, SearchIndex, build_search_index
from .insights import InsightsAggregator
from .models import (
    Category,
    Document,
    Highlight,
    IndexEntry,
    Insights,
    MatchField,
    MessageFlags,
    QueryCategory,
    QueryLogEntry,
    SearchResult,
    TermType,
    TypedTerm,
)
from .ranking import RelevanceScorer
from .similarity import SimilarityEngine, jaccard_similarity
from .suggestions import suggest_queries
from .tokenizer import STOP_WORDS, tokenize, tokenize_query

__all__ = [
    # Main classes
    "SearchEngine",
    "create_engine",
    "SearchIndex",
    "IndexBuilder",
    "build_search_index",
    "RelevanceScorer",
    "Highlighter",
    "SummaryGenerator",
    "SimilarityEngine",
    "jaccard_similarity",
    "QueryClassifier",
    "InsightsAggregator",
    "QueryHistory",
    "suggest_queries",
    # Text analysis
    "tokenize",
    "tokenize_query",
    "STOP_WORDS",
    "extract_entities",
    # Models
    "Document",
    "MessageFlags",
    "IndexEntry",
    "SearchResult",
    "Highlight",
    "MatchField",
    "QueryCategory",
    "Category",
    "TypedTerm",
    "TermType",
    "QueryLogEntry",
    "Insights",
    # Configuration
    "SearchConfig",
    "FieldWeights",
    "load_config",
    # Errors
    "SearchError",
    "IndexBuildError",
    "ConfigError",
    "HistoryError",
]

__version__ = "1.0.0"
