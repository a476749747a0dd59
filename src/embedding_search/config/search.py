import os


class Search:
    def __init__(self, config: dict | None = None) -> None:
        search_cfg = (config or {}).get("embeddingsearch", {}).get("search", {})
        self.DEFAULT_TOP_N: int = int(search_cfg.get("top_n", os.getenv("SEARCH_TOP_N", "5")))
        # -inf keeps every candidate
        self.MIN_SCORE: float = float(search_cfg.get("min_score", os.getenv("SEARCH_MIN_SCORE", "-inf")))

        if self.DEFAULT_TOP_N <= 0:
            raise ValueError(f"SEARCH_TOP_N must be positive, got {self.DEFAULT_TOP_N}")
