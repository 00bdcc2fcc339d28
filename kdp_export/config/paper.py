from dataclasses import dataclass
from typing import Dict

# Spine thickness per paper stock, expressed as interior pages per inch.
# KDP publishes 0.002252in/page for white paper, i.e. ~444 pages per inch.


@dataclass(frozen=True)
class PaperStock:
    name: str
    pages_per_inch: float

    def spine_width(self, page_count: int) -> float:
        return page_count / self.pages_per_inch


WHITE_PAPER = PaperStock(name="white", pages_per_inch=444)

PAPER_STOCKS: Dict[str, PaperStock] = {
    WHITE_PAPER.name: WHITE_PAPER,
}


def get_paper_stock(name: str) -> PaperStock:
    if name not in PAPER_STOCKS:
        raise ValueError(f"Unknown paper '{name}'. Use one of {list(PAPER_STOCKS.keys())}")
    return PAPER_STOCKS[name]
