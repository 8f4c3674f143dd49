from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from prompt_optimizer.classification.vocabulary import DEFAULT_VOCABULARY, HeadingVocabulary
from prompt_optimizer.utils.io import read_text
from prompt_optimizer.utils.paths import PROMPTS_DIR

DEFAULT_TEMPLATE_PATH = PROMPTS_DIR / "prompt_rewrite_system.md"


def render_section_outline(vocabulary: HeadingVocabulary) -> str:
    lines: List[str] = []
    for index, section in enumerate(vocabulary.deliverable_sections, start=1):
        suffix = " (at the top)" if index == 1 else ""
        lines.append(f"{index}. **{section.name}**{suffix}")
        lines.extend(f"   - {hint}" for hint in section.guidance)
        lines.append("")
    return "\n".join(lines).strip()


def build_system_prompt(
    vocabulary: HeadingVocabulary = DEFAULT_VOCABULARY,
    template_path: Optional[Path] = None,
) -> str:
    template = read_text(template_path or DEFAULT_TEMPLATE_PATH)
    # str.replace keeps literal braces elsewhere in the template intact.
    return (
        template.replace("{sections}", render_section_outline(vocabulary))
        .replace("{missing_heading}", vocabulary.missing_context_headings[0])
        .strip()
        + "\n"
    )
