"""Render itinerary display blocks as HTML."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable
import html as html_module

from .models import BlockKind, DisplayBlock
from .renderer import render_itinerary
from .templates import generate_itinerary_page, icon_html


class ItineraryWebView:
    """Generate HTML for rendered itineraries.

    Every text field is escaped here except RICH_TEXT bodies, which the
    classifier escaped before inserting ``<strong>`` spans.
    """

    def render_html(self, blocks: Iterable[DisplayBlock]) -> str:
        """Build an HTML fragment with one element per display block."""
        return "\n".join(self._block_html(block) for block in blocks)

    def render_text(self, text: str) -> str:
        """Classify, render and convert raw itinerary text to HTML."""
        return self.render_html(render_itinerary(text))

    def generate(self, text: str, output_path: str | Path, title: str = "Your Itinerary") -> Path:
        """Write a standalone HTML page for an itinerary."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        page = generate_itinerary_page(
            title=html_module.escape(title),
            itinerary_html=self.render_text(text),
        )
        output_path.write_text(page)
        return output_path

    def _block_html(self, block: DisplayBlock) -> str:
        text = html_module.escape(block.text) if block.text else ""

        if block.kind is BlockKind.SPACER:
            return '<div class="itinerary-spacer"></div>'

        if block.kind is BlockKind.HEADING:
            return (
                f'<div class="itinerary-day">{icon_html(block.icon)}'
                f'<h3>{text}</h3></div>'
            )

        if block.kind is BlockKind.LABEL:
            heading = html_module.escape(block.heading or "")
            parts = ['<div class="itinerary-label">']
            parts.append(icon_html(block.icon))
            parts.append(f'<span class="itinerary-label-text">{heading}:</span>')
            if text:
                parts.append(f'<span class="itinerary-label-body">{text}</span>')
            parts.append("</div>")
            return "".join(parts)

        if block.kind is BlockKind.BULLET_ROW:
            return (
                f'<div class="itinerary-bullet">{icon_html(block.icon)}'
                f'<span>{text}</span></div>'
            )

        if block.kind is BlockKind.RICH_TEXT:
            # Already escaped, contains only <strong> markup
            return f'<p class="itinerary-text">{block.text or ""}</p>'

        css_class = "itinerary-text itinerary-nested" if block.nested else "itinerary-text"
        return f'<p class="{css_class}">{text}</p>'
