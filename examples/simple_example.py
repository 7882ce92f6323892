#!/usr/bin/env python3
"""
Simple Example: Wrapped, Truncated Text Rendered to PDF

Lays out a paragraph in a fixed box and draws it with ReportLab.
"""

from reportlab.pdfgen import canvas

from canvastext import StyleConfig, TextLayout, ReportLabBackend, render_text

style = StyleConfig(
    font_family="Times New Roman, serif",
    font_size=14,
    width=220,
    height=60,
    padding=6,
    align="justify",
    ellipsis=True,
    text_decoration="underline",
)
layout = TextLayout("All the world's a stage, and all the men and women merely players.", style)

for line in layout.lines:
    print(f"{line.width:6.1f}  {line.text}")

c = canvas.Canvas("simple_example.pdf", pagesize=(240, 80))
render_text(layout, ReportLabBackend(c, page_height=80))
c.save()

print("✓ Text saved to: simple_example.pdf")
