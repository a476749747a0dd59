import os


class Embeddings:
    def __init__(self, config: dict | None = None) -> None:
        emb_cfg = (config or {}).get("embeddingsearch", {}).get("embeddings", {})

        key_env = str(emb_cfg.get("openai_key_env", "OPENAI_API_KEY"))
        self.OPENAI_API_KEY: str | None = os.getenv(key_env)

        self.EMB_MODEL_ID: str = str(emb_cfg.get("emb_model_id", os.getenv("EMB_MODEL_ID", "text-embedding-3-small")))
        self.EMB_DIM: int = int(emb_cfg.get("emb_dim", os.getenv("EMB_DIM", "1536")))

        if self.EMB_DIM <= 0:
            raise ValueError(f"EMB_DIM must be positive, got {self.EMB_DIM}")
