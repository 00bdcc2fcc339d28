from dataclasses import dataclass
from enum import Enum
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from PIL import Image

from kdp_export.errors import ImageEmbedFailure

PNG_MAGIC_BYTE = 0x89


class ImageFormat(str, Enum):
    PNG = "PNG"
    JPEG = "JPEG"


def detect_format(data: bytes, name: Optional[str] = None) -> ImageFormat:
    if (data and data[0] == PNG_MAGIC_BYTE) or (name and name.lower().endswith(".png")):
        return ImageFormat.PNG
    return ImageFormat.JPEG


@dataclass
class SourceImage:
    data: bytes
    format: ImageFormat
    name: Optional[str] = None
    width: Optional[int] = None  # pixels, known after load
    height: Optional[int] = None

    @classmethod
    def from_bytes(cls, data: bytes, name: Optional[str] = None) -> "SourceImage":
        return cls(data=data, format=detect_format(data, name), name=name)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "SourceImage":
        path = Path(path)
        return cls.from_bytes(path.read_bytes(), name=path.name)


def load_image(source: SourceImage, index: int) -> Image.Image:
    """
    Decode a source image fully and record its pixel size.

    Raises ImageEmbedFailure for unreadable, truncated or mislabelled data.
    """
    try:
        img = Image.open(BytesIO(source.data))
        decoded_format = img.format
        # Image.open is lazy; load() forces a full decode so truncation surfaces here
        img.load()
    except Exception as e:
        raise ImageEmbedFailure(index, source.name, str(e) or type(e).__name__) from e

    if decoded_format != source.format.value:
        raise ImageEmbedFailure(
            index, source.name, f"expected {source.format.value} data, found {decoded_format}"
        )

    source.width, source.height = img.size
    return img
