from pathlib import Path

from printform.extraction.exceptions import ExtractionError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt(name: str, prompt_dir: Path | None = None) -> str:
    """Load a bundled extraction prompt by file stem.

    Args:
        name: Prompt file stem, e.g. ``"gemini_extraction"``.
        prompt_dir: Directory holding ``<name>.txt``.
              Defaults to the bundled prompts directory.

    Returns:
        The prompt text.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    path = (prompt_dir or _DEFAULT_PROMPT_DIR) / f"{name}.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionError(f"Failed to load prompt '{name}': {exc}") from exc
