"""Generate the system-tray icon (64×64 PIL Image, in-memory)."""

from datetime import date

from PIL import Image, ImageDraw, ImageFont

_BAND = "#D32F2F"


def create_icon_image(today: date | None = None) -> Image.Image:
    """Return a 64×64 RGBA tear-off page: red band on top, day of month below."""
    size = 64
    band_h = 14
    img = Image.new("RGBA", (size, size), "white")
    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, size - 1, band_h - 1), fill=_BAND)

    text = str((today or date.today()).day)
    avail_h = size - band_h

    # Find the largest font size that fits below the band
    font_size = 60
    font = None
    while font_size > 10:
        try:
            font = ImageFont.truetype("DejaVuSans-Bold.ttf", font_size)
        except OSError:
            font = ImageFont.load_default()
            break
        bbox = draw.textbbox((0, 0), text, font=font)
        tw = bbox[2] - bbox[0]
        th = bbox[3] - bbox[1]
        if tw <= size - 4 and th <= avail_h - 4:
            break
        font_size -= 1

    # Centre the visible pixels in the area under the band
    bbox = draw.textbbox((0, 0), text, font=font)
    x = (size - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = band_h + (avail_h - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill="black", font=font)

    return img
