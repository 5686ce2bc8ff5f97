#!/usr/bin/env python3
"""
Simple Example: Satire News Card

The simplest way to render a card programmatically. Sources may be URLs or local files.
"""

from pathlib import Path

from cardcanvas import SatireNewsCard

card = SatireNewsCard(
    headline="he love Jea",
    name="Lance",
    avatar="https://raw.githubusercontent.com/lanceajiro/Storage/refs/heads/main/1756728735205.jpg",  # Replace with your image
    background="https://raw.githubusercontent.com/lanceajiro/Storage/refs/heads/main/backiee-265579-landscape.jpg",
)

Path("snews.png").write_bytes(card.to_png())

print("✓ Card saved to: snews.png")
