#!/usr/bin/env python3
"""
Render a stored rich-text document - prints the HTML and the extracted images.

Runs the full ContentPipeline:
- Normalize (array, JSON string or doc wrapper)
- Asset extraction (image nodes and <img> markup inside text)
- HTML rendering

Usage:
    python scripts/render_document.py FILE [--save]

Example:
    python scripts/render_document.py protocol_instructions.json
    python scripts/render_document.py protocol_instructions.json --save
"""
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rich_content.pipeline import content_pipeline


def render_file(path: Path, save: bool = False) -> None:
    """Render a stored document file through the full pipeline."""
    print(f"\n{'=' * 60}")
    print(f"📄 Rendering: {path}")
    print(f"{'=' * 60}\n")

    raw = path.read_text(encoding="utf-8")
    result = content_pipeline.process(raw)

    print("📊 Statistics:")
    print(f"   - Top-level nodes: {result.metadata['node_count']}")
    print(f"   - Images found: {result.metadata['asset_count']}")
    print(f"   - HTML length: {result.metadata['html_length']} characters")
    print(f"   - Pipeline steps: {', '.join(result.steps_applied)}")

    if result.assets:
        print("\n🖼️  Images:")
        for asset in result.assets:
            alt = f' (alt: "{asset.alt}")' if asset.alt else ""
            print(f"   - {asset.src}{alt}")

    print(f"\n{'─' * 60}")
    print(result.html or "(empty document)")
    print(f"{'─' * 60}\n")

    if save:
        output = path.with_suffix(".html")
        output.write_text(result.html, encoding="utf-8")
        print(f"💾 Saved to: {output}")


def main():
    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    save = "--save" in sys.argv

    if not args:
        print(__doc__)
        sys.exit(1)

    path = Path(args[0])
    if not path.exists():
        print(f"❌ File not found: {path}")
        sys.exit(1)

    render_file(path, save=save)


if __name__ == "__main__":
    main()
