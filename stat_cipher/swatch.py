"""
Swatch Sheet — Cipher Blocks as Colour Patches
===============================================
Paints each encrypted block as two solid RGB squares, triple1 then
triple2, one block per row. It can also read the colours back off the
image. The sheet is all an outside observer gets to see. With the
right units, the triples on it are enough to decrypt the message.

Carrier format: PNG only. Lossy formats such as JPEG shift the colour
values and destroy the cipher bytes.

Layout:  width = 2 * PATCH,  height = blocks * PATCH

Dependencies: Pillow >= 10.0
"""

import io
import logging
from typing import List, Sequence, Tuple, Union

from PIL import Image

from .codec import MessageCodec, Triple
from .errors import InvalidBlockLength

logger = logging.getLogger(__name__)

ImageInput = Union[str, bytes, Image.Image]


class SwatchSheet:
    """Render and read back colour-triple swatches."""

    PATCH = 16   # pixel edge of one colour square

    def __init__(self, patch: int = None):
        self.patch = patch or self.PATCH

    def render(self, triples: Sequence[Tuple[Sequence[int], Sequence[int]]]) -> bytes:
        """
        Paint one row of two patches per block.

        Args:
            triples : (triple1, triple2) per block, e.g. taken from
                      EncryptedBlock.triple1 / .triple2

        Returns:
            PNG bytes of the swatch sheet
        """
        if not triples:
            raise InvalidBlockLength("Nothing to render: no colour triples given.")
        p = self.patch
        img = Image.new("RGB", (2 * p, len(triples) * p))
        # validate every row before painting; Pillow clamps out-of-range values
        rows = [MessageCodec.split_triples(MessageCodec.triples_to_cipher_bytes(t1, t2))
                for t1, t2 in triples]
        for row, colours in enumerate(rows):
            for col, rgb in enumerate(colours):
                img.paste(rgb, (col * p, row * p, (col + 1) * p, (row + 1) * p))

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        logger.debug(f"Rendered swatch sheet: {len(triples)} rows, {img.size}")
        return buf.getvalue()

    def read(self, image_input: ImageInput) -> List[Tuple[Triple, Triple]]:
        """Sample the centre of each patch and return (triple1, triple2) rows."""
        img = self._load(image_input).convert("RGB")
        p = self.patch
        w, h = img.size
        if w != 2 * p or h == 0 or h % p:
            raise InvalidBlockLength(
                f"Image {w}x{h} is not a swatch sheet of {p}px patches."
            )
        centre = p // 2
        rows = []
        for row in range(h // p):
            y = row * p + centre
            rows.append((img.getpixel((centre, y)), img.getpixel((p + centre, y))))
        return rows

    @staticmethod
    def _load(src: ImageInput) -> Image.Image:
        if isinstance(src, Image.Image):
            return src
        if isinstance(src, (bytes, bytearray)):
            return Image.open(io.BytesIO(src))
        return Image.open(src)


def to_hex(triple: Sequence[int]) -> str:
    """(r, g, b) → '#rrggbb'."""
    return "#" + "".join(f"{c:02x}" for c in triple)


def format_bytes(values: Sequence[int]) -> str:
    """Right-aligned byte listing, e.g. '[116, 125,  13]'."""
    return "[" + ", ".join(f"{v:>3}" for v in values) + "]"
