"""The text post-processing pipeline applied to every transcript."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from transcript_dictate.config import (
    DEFAULT_DETECT_QUOTATIONS,
    DEFAULT_OUTPUT_STYLE,
    DEFAULT_REMOVE_STUTTERING,
)
from transcript_dictate.destutter import de_stutter
from transcript_dictate.quotations import detect_quotations
from transcript_dictate.replacements import ReplacementRule, apply_replacements
from transcript_dictate.settings_store import parse_bool
from transcript_dictate.styles import OutputStyle, apply_style


@dataclass(frozen=True)
class PipelineConfig:
    """Snapshot of the post-processing switches for one invocation."""

    remove_stuttering: bool = DEFAULT_REMOVE_STUTTERING
    detect_quotations: bool = DEFAULT_DETECT_QUOTATIONS
    output_style: OutputStyle = OutputStyle(DEFAULT_OUTPUT_STYLE)

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> PipelineConfig:
        """Build a config from persisted settings, using defaults for missing keys."""

        return cls(
            remove_stuttering=parse_bool(
                settings.get("remove_stuttering"), DEFAULT_REMOVE_STUTTERING
            ),
            detect_quotations=parse_bool(
                settings.get("detect_quotations"), DEFAULT_DETECT_QUOTATIONS
            ),
            output_style=OutputStyle.parse(settings.get("output_style", DEFAULT_OUTPUT_STYLE)),
        )


def process_text(
    text: str,
    rules: Sequence[ReplacementRule] = (),
    config: PipelineConfig | None = None,
) -> str:
    """Run replacements, de-stuttering, quotation detection, and styling in order."""

    config = config or PipelineConfig()

    result = apply_replacements(text, rules)
    if config.remove_stuttering:
        result = de_stutter(result)
    if config.detect_quotations:
        result = detect_quotations(result)
    return apply_style(config.output_style, result)
