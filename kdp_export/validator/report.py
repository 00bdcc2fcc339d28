from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import List, Union

from pypdf import PdfReader

PdfSource = Union[bytes, str, Path]

# Size tolerance in points when comparing MediaBoxes
SIZE_TOLERANCE_PT = 0.5


@dataclass
class Issue:
    level: str  # "error" | "warning" | "info"
    message: str


@dataclass
class Report:
    issues: List[Issue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not any(i.level == "error" for i in self.issues)

    def add(self, level: str, message: str):
        self.issues.append(Issue(level, message))


def open_pdf(pdf: PdfSource) -> PdfReader:
    if isinstance(pdf, (bytes, bytearray)):
        return PdfReader(BytesIO(pdf))
    return PdfReader(str(pdf))


def almost_equal(a: float, b: float, tol: float = SIZE_TOLERANCE_PT) -> bool:
    return abs(a - b) <= tol
