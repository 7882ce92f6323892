#!/usr/bin/env python3
"""
Hook Example: Per-Character Styling on a PNG

Every other glyph is lifted and painted red through the character hook.
"""

from canvastext import PillowBackend, StyleConfig, TextLayout, render_text

backend = PillowBackend.new(360, 60)
layout = TextLayout("Wavy canvas text", StyleConfig(font_size=32, padding=10), measurer=backend)


def wave(run, scope):
    if run.index % 2:
        scope.translate(0, -4)
        scope.set_fill("red")


render_text(layout, backend, hook=wave)
backend.image.save("hook_example.png")

print("✓ Image saved to: hook_example.png")
