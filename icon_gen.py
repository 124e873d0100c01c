"""Generate the system-tray icon (64×64 PIL Image, in-memory)."""

from datetime import date

from PIL import Image, ImageDraw, ImageFont

ACCENT = "#0078D4"


def _fit_font(draw: ImageDraw.ImageDraw, text: str, max_w: int, max_h: int):
    """Largest TrueType font that fits the box, or Pillow's default."""
    for size in range(max_h * 2, 8, -1):
        try:
            font = ImageFont.truetype("DejaVuSans-Bold.ttf", size)
        except OSError:
            return ImageFont.load_default()
        bbox = draw.textbbox((0, 0), text, font=font)
        if bbox[2] - bbox[0] <= max_w and bbox[3] - bbox[1] <= max_h:
            return font
    return ImageFont.load_default()


def create_icon_image(today: date | None = None, size: int = 64) -> Image.Image:
    """Return a tear-off calendar page showing today's day of the month."""
    today = today or date.today()
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    band = size // 4
    draw.rounded_rectangle((0, 0, size - 1, size - 1), radius=size // 8,
                           fill="white", outline=ACCENT, width=2)
    draw.rectangle((1, 1, size - 2, band), fill=ACCENT)

    text = str(today.day)
    font = _fit_font(draw, text, size - 8, size - band - 8)
    # Centre the visible pixels in the area below the band
    bbox = draw.textbbox((0, 0), text, font=font)
    x = (size - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = band + (size - band - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill="black", font=font)
    return img
