"""
Share text for the survey.

Only the content is produced here. Native share sheets, clipboard access and
the "copy this link" prompt belong to the platform.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from selfassess.model import SurveyResult

SHARE_TITLE = "The Lebanese Indoctrination Self-Assessment"
SHARE_TEXT = (
    "Take the Lebanese Indoctrination Self-Assessment — a reflective exercise "
    "for recognizing inherited beliefs vs. examined convictions."
)
SHARE_PROMPT = "Copy this link to share:"
COPIED_MESSAGE = "Link copied to clipboard!"


@dataclass(frozen=True)
class ShareSummary:
    title: str
    text: str
    url: str

    def as_clipboard_text(self) -> str:
        """Fallback text for platforms without a share sheet."""
        return f"{self.text}\n\n{self.url}"

    def as_prompt(self) -> Tuple[str, str]:
        """Last-resort (message, default value) pair for a manual copy prompt."""
        return SHARE_PROMPT, self.url


def build_share_summary(url: str, result: Optional[SurveyResult] = None) -> ShareSummary:
    """
    Build the share payload for `url`.

    The invitation text never includes the sharer's score unless a result is
    passed explicitly.
    """
    if not url:
        raise ValueError("A share URL is required")
    text = SHARE_TEXT
    if result is not None:
        text = f"I scored {result.total_score} ({result.band_title}). {SHARE_TEXT}"
    return ShareSummary(title=SHARE_TITLE, text=text, url=url)
