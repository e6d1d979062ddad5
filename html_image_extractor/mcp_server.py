"""MCP server exposing the inline image extractor as a tool."""

from __future__ import annotations

import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from .config import DEFAULT_BASE_URL, DEFAULT_NAME_PREFIX
from .extractor import extract
from .images import save_images
from .models import ImageOutputFormat

logger = logging.getLogger("html_image_extractor.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="html-image-extractor")


@mcp.tool()
def extract_images(
    html: str,
    output_dir: str,
    base_url: str = DEFAULT_BASE_URL,
    image_format: str = "png",
    name_prefix: str = DEFAULT_NAME_PREFIX,
) -> str:
    """Save inline base64 images from HTML to a directory and return the rewritten HTML."""
    target = Path(output_dir).expanduser()
    result = extract(
        html,
        base_url=base_url,
        image_format=ImageOutputFormat.parse(image_format),
        name_prefix=name_prefix,
    )
    saved = save_images(result.image_files, target)
    if len(saved) != len(result.image_files):
        raise RuntimeError(f"Failed to write every extracted image to {target}")
    return result.modified_html


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
