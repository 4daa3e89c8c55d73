# Képelőfeldolgozás OCR előtt: kontraszt emelés és élesítés
import io
import logging
from PIL import Image, ImageFilter

logger = logging.getLogger(__name__)

CONTRAST = 1.5
SHARPEN = 1.2
JPEG_QUALITY = 95

# 4-szomszédos élesítő kernel, összege 1
SHARPEN_KERNEL = ImageFilter.Kernel(
    (3, 3),
    [0, -SHARPEN * 0.25, 0,
     -SHARPEN * 0.25, 1 + SHARPEN, -SHARPEN * 0.25,
     0, -SHARPEN * 0.25, 0],
    scale=1,
)


def _contrast(value: int) -> int:
    return max(0, min(255, int(value * CONTRAST + 128 * (1 - CONTRAST))))


def preprocess_image(content: bytes) -> bytes:
    """Kontrasztot emel és élesít, JPEG-ként adja vissza a képet.

    Kiemelten a Dayforce képernyőfotókhoz: a halvány szürke szöveg így
    jobban olvasható a modellnek.

    Args:
        content (bytes): Az eredeti kép bájtjai (bármely Pillow által ismert formátum).

    Returns:
        bytes: Az előfeldolgozott JPEG, hiba esetén az eredeti bájtok.
    """
    try:
        with Image.open(io.BytesIO(content)) as image:
            rgb = image.convert("RGB")
        contrasted = rgb.point(_contrast)
        sharpened = contrasted.filter(SHARPEN_KERNEL)

        output = io.BytesIO()
        sharpened.save(output, format="JPEG", quality=JPEG_QUALITY)
        logger.debug(f"Kép előfeldolgozva: {len(content)} -> {output.tell()} bájt")
        return output.getvalue()
    except Exception as e:
        logger.warning(f"❌ Képelőfeldolgozás sikertelen, eredeti kép marad: {e}")
        return content
