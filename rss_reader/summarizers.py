from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Protocol
import concurrent.futures as _fut
import importlib
import logging
import os

from .models import Article

logger = logging.getLogger(__name__)

SUMMARY_ERROR = "Sorry, something went wrong while generating the summary."
SUMMARY_EMPTY = "Could not generate a summary."
MAX_INPUT_CHARS = 5000


class Summarizer(Protocol):
    def summarize(self, text: str, *, language: Optional[str] = None) -> str:  # pragma: no cover - interface
        ...


@dataclass
class SummarizeOptions:
    provider: str = "gemini"  # "gemini" | "openai" | "none"
    model: Optional[str] = None
    max_input_chars: int = MAX_INPUT_CHARS
    max_workers: int = 4
    timeout_sec: float = 30.0
    language: Optional[str] = None  # hint for prompt


def _prompt(text: str, language: Optional[str]) -> str:
    lang = language or "English"
    return (
        f"Write a brief summary of the following text in {lang} (at most 3 bullet points). "
        f"Article text: {text}"
    )


class NullSummarizer:
    """Returns the input unchanged; used when no provider is configured."""

    def summarize(self, text: str, *, language: Optional[str] = None) -> str:
        return text


def _require(module: str, package: str):
    """Import a provider SDK, turning a missing install into a RuntimeError."""
    try:
        return importlib.import_module(module)
    except ImportError as e:  # pragma: no cover - optional dep
        raise RuntimeError(f"{package} is required for this provider. Install with `pip install {package}`.") from e


def _api_key(explicit: Optional[str], *env_vars: str) -> str:
    key = explicit or next((os.getenv(v) for v in env_vars if os.getenv(v)), None)
    if not key:
        raise RuntimeError(f"{' or '.join(env_vars)} not set.")
    return key


class OpenAISummarizer:
    def __init__(self, *, api_key: Optional[str], model: Optional[str], timeout_sec: float) -> None:
        openai = _require("openai", "openai")
        self._client = openai.OpenAI(api_key=_api_key(api_key, "OPENAI_API_KEY"))
        self._model = model or os.getenv("OPENAI_MODEL", "gpt-4o-mini")
        self._timeout = timeout_sec

    def summarize(self, text: str, *, language: Optional[str] = None) -> str:
        resp = self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": "You are a concise news summarizer. No preface, no title."},
                {"role": "user", "content": _prompt(text, language)},
            ],
            timeout=self._timeout,
        )
        content = resp.choices[0].message.content if resp and resp.choices else None
        return (content or "").strip()


class GeminiSummarizer:
    def __init__(self, *, api_key: Optional[str], model: Optional[str], timeout_sec: float) -> None:
        self._genai = _require("google.generativeai", "google-generativeai")
        self._genai.configure(api_key=_api_key(api_key, "GOOGLE_API_KEY", "GEMINI_API_KEY"))
        self._model_name = model or os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        self._timeout = timeout_sec

    def summarize(self, text: str, *, language: Optional[str] = None) -> str:
        model = self._genai.GenerativeModel(self._model_name)
        resp = model.generate_content(_prompt(text, language), request_options={"timeout": self._timeout})
        out = getattr(resp, "text", None)
        return str(out).strip() if out else ""


def build_summarizer(options: Optional[SummarizeOptions]) -> Summarizer:
    if not options:
        return NullSummarizer()
    provider = (options.provider or "").lower()
    if provider == "openai":
        return OpenAISummarizer(api_key=None, model=options.model, timeout_sec=options.timeout_sec)
    if provider in {"gemini", "google", "googleai"}:
        return GeminiSummarizer(api_key=None, model=options.model, timeout_sec=options.timeout_sec)
    # Unknown provider → no-op
    return NullSummarizer()


def summarize(
    text: str,
    max_chars: int = MAX_INPUT_CHARS,
    *,
    summarizer: Optional[Summarizer] = None,
    options: Optional[SummarizeOptions] = None,
) -> str:
    """
    Summarize ``text`` (cut to ``max_chars``). Never raises: provider errors yield
    SUMMARY_ERROR and an empty answer yields SUMMARY_EMPTY.
    """
    options = options or SummarizeOptions()
    text = text[:max_chars] if max_chars > 0 else text
    try:
        summarizer = summarizer or build_summarizer(options)
        out = summarizer.summarize(text, language=options.language)
    except Exception:
        logger.exception("Summarization failed")
        return SUMMARY_ERROR
    return out or SUMMARY_EMPTY


def summarize_articles(
    articles: Iterable[Article],
    *,
    options: SummarizeOptions,
    summarizer: Optional[Summarizer] = None,
) -> Dict[str, str]:
    """Summarize each article's content (or snippet); returns {article.id: summary}."""
    articles = list(articles)
    if summarizer is None:
        try:
            summarizer = build_summarizer(options)
        except RuntimeError:
            logger.exception("Could not set up summarizer")
            return {a.id: SUMMARY_ERROR for a in articles}

    def _one(a: Article) -> str:
        return summarize(
            a.content or a.content_snippet,
            options.max_input_chars,
            summarizer=summarizer,
            options=options,
        )

    max_workers = max(1, int(options.max_workers or 1))
    if max_workers == 1:
        return {a.id: _one(a) for a in articles}

    with _fut.ThreadPoolExecutor(max_workers=max_workers) as ex:
        summaries = list(ex.map(_one, articles))
    return {a.id: s for a, s in zip(articles, summaries)}
