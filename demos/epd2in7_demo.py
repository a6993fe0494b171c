"""
2.7" Panel Demo - Text, Images, Rotation and Layers
===================================================
Walks through the composition pipeline on real hardware:

  1. Simple text
  2. Image
  3. Rotated text
  4. Rotated image
  5. Text at an arbitrary point (transparent)
  6. Rotated image at an arbitrary point (partly off-screen)
  7. Rotated text at an arbitrary point
  8. Image + text, opaque
  9. Image + text, transparent

The panel is cleared between screens and put to sleep at the end.

Wiring and timing come from EPAPER_* environment variables (see
epaper.settings). Usage:

    python demos/epd2in7_demo.py [image.png] [font.ttf]
"""
import logging
import sys
import time

from epaper import Canvas, EPaperError, load_image
from epaper.logging_setup import setup_logging
from epaper.settings import DeviceSettings

logger = logging.getLogger("epd2in7_demo")

TEXT = "Hi, I'm an e-paper display! This is a demo."
FONT_SIZE = 8
HOLD_S = 5.0


def show(canvas: Canvas, title: str, hold: float = 0):
    logger.info("Printing %s", title)
    t = canvas.print_display()
    logger.info("  refresh took %.2fs", t)
    if hold:
        time.sleep(hold)
    canvas.clear_screen()


def run(canvas: Canvas, image_path=None, font_path=None):
    """Run every demo screen."""
    text = canvas.write(TEXT, FONT_SIZE, font_path)
    text_rotated = canvas.rotate(canvas.write(TEXT, FONT_SIZE, font_path, rotate=True))

    canvas.add_layer(text)
    show(canvas, "screen 1 (simple text)", HOLD_S)

    if image_path:
        canvas.add_image(image_path)
        show(canvas, "screen 2 (image)", HOLD_S)

    canvas.add_layer(text_rotated)
    show(canvas, "screen 3 (rotated text)")

    if image_path:
        image_rotated = canvas.rotate(load_image(image_path))

        canvas.add_layer(image_rotated)
        show(canvas, "screen 4 (rotated image)", HOLD_S)

    canvas.add_layer(text, 30, 30, transparent=True)
    show(canvas, "screen 5 (text at arbitrary point)")

    if image_path:
        canvas.add_layer(image_rotated, 30, -32)
        show(canvas, "screen 6 (rotated image at arbitrary point)", HOLD_S)

    canvas.add_layer(text_rotated, 30, -32)
    show(canvas, "screen 7 (rotated text at arbitrary point)")

    if image_path:
        for transparent in (False, True):
            canvas.add_image(image_path)
            canvas.add_layer(text, 30, 30, transparent=transparent)
            mode = "with" if transparent else "no"
            show(canvas, f"two layers, {mode} transparency")


def main(argv) -> int:
    settings = DeviceSettings.from_env()
    setup_logging(settings.log_level)

    image_path = argv[1] if len(argv) > 1 else None
    font_path = argv[2] if len(argv) > 2 else None

    try:
        with Canvas.from_settings(settings) as canvas:
            logger.info("Initializing e-paper (%s)", canvas.panel.name)
            canvas.init(clear=True)
            run(canvas, image_path, font_path)
            logger.info("Putting display into low-power sleep")
            canvas.sleep()
    except EPaperError as err:
        logger.error("Demo failed: %s", err)
        return 1

    logger.info("Finished")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
