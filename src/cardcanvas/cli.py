"""CLI interface for cardcanvas."""

import logging
from pathlib import Path

import click

from cardcanvas.cards import SatireNewsCard
from cardcanvas.config import load_config
from cardcanvas.errors import CardCanvasError
from cardcanvas.fonts import register_fonts
from cardcanvas.render.image import ImageLoader


@click.group()
@click.version_option()
@click.option("-v", "--verbose", is_flag=True, help="Log image fetches and font resolution.")
def main(verbose: bool) -> None:
    """Render generated social images such as satire news cards."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    register_fonts()


@main.command()
@click.argument("headline")
@click.option("--name", required=True, help='Who makes the claim ("{name} claims that ...").')
@click.option("--pfp", required=True, help="Avatar image: URL or local file path.")
@click.option("--bg", help="Background image: URL or local file path. Defaults to the avatar.")
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    default=Path("snews.png"),
    show_default=True,
    help="Output PNG file path.",
)
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to cardcanvas.toml. Defaults to ./cardcanvas.toml when present.",
)
def snews(headline: str, name: str, pfp: str, bg: str | None, output: Path, config: Path | None) -> None:
    """
    Render a satire news card to a PNG file.

    Example:

        cardcanvas snews "cats can fly" --name Lance --pfp avatar.jpg
    """
    try:
        cfg = load_config(config)
        if cfg.fonts.fonts_dir:
            register_fonts(cfg.fonts.fonts_dir)

        card = SatireNewsCard(headline=headline, name=name, avatar=pfp, background=bg)
        png = card.to_png(ImageLoader(cfg.fetch))
        output.write_bytes(png)

        click.echo(f"✓ Satire news card saved to: {output}")

    except (CardCanvasError, ValueError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@main.command()
@click.option("--host", help="Bind address. Uses config default if not specified.")
@click.option("--port", type=int, help="Port. Uses config default if not specified.")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to cardcanvas.toml. Defaults to ./cardcanvas.toml when present.",
)
def serve(host: str | None, port: int | None, config: Path | None) -> None:
    """Serve the rendering endpoints over HTTP."""
    import uvicorn

    from cardcanvas.server import create_app

    try:
        cfg = load_config(config)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    uvicorn.run(create_app(cfg), host=host or cfg.server.host, port=port or cfg.server.port)


if __name__ == "__main__":
    main()
