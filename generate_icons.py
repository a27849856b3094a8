"""
Battery Icon Generator
Renders the notification app icon and a preview strip of tray glyphs.
"""

import os

from PIL import Image

from battery_tray.icon import ICON_SIZE, IconComposer

PREVIEW_LEVELS = (0, 15, 30, 45, 80, 100)


def create_app_icon(directory, composer=None):
    """
    Create the notification app icon in PNG and ICO form.

    Args:
        directory: Output directory
        composer: IconComposer to draw with

    Returns:
        Tuple of (png path, ico path)
    """
    composer = composer or IconComposer()
    image = composer.render(100, True)

    png_path = os.path.join(directory, 'icon.png')
    ico_path = os.path.join(directory, 'icon.ico')

    image.save(png_path, 'PNG')
    image.save(ico_path, 'ICO', sizes=[(ICON_SIZE, ICON_SIZE)])
    image.close()

    print(f"Created: {png_path}")
    print(f"Created: {ico_path}")
    return png_path, ico_path


def create_preview_strip(filename, levels=PREVIEW_LEVELS, composer=None):
    """
    Render glyphs for several levels side by side, discharging on top and
    charging below.

    Args:
        filename: Output filename path
        levels: Percentages to render
        composer: IconComposer to draw with
    """
    composer = composer or IconComposer()
    strip = Image.new('RGBA', (ICON_SIZE * len(levels), ICON_SIZE * 2), (0, 0, 0, 0))

    for column, percent in enumerate(levels):
        for row, charging in enumerate((False, True)):
            glyph = composer.render(percent, charging)
            strip.paste(glyph, (column * ICON_SIZE, row * ICON_SIZE))
            glyph.close()

    strip.save(filename, 'PNG')
    print(f"Created: {filename}")


def main():
    """Generate the app icon and the preview strip."""
    assets_dir = os.path.join(os.path.dirname(__file__), 'battery_tray', 'assets')
    os.makedirs(assets_dir, exist_ok=True)

    print("Generating battery icons...")
    print("-" * 50)

    create_app_icon(assets_dir)
    create_preview_strip(os.path.join(assets_dir, 'preview.png'))

    print("-" * 50)
    print("Icon generation complete!")


if __name__ == '__main__':
    main()
