from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    embedding_provider: str = ""
    embedding_dimensions: int = 0


class CalibrateResponse(BaseModel):
    raw_score: float
    adjusted_score: float
    history_used: int = 0  # records inside the calibration window
