# -*- coding: utf-8 -*-
"""AI relay — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from ..food_logs.models import FoodLog


class FoodAnalyzeRequest(BaseModel):
    image_base64: Optional[str] = Field(None, min_length=16, description="Data URL or raw base64")
    image_url: Optional[str] = Field(None, max_length=2048)

    @model_validator(mode="after")
    def _one_image(self) -> "FoodAnalyzeRequest":
        if not self.image_base64 and not self.image_url:
            raise ValueError("image_base64 or image_url is required")
        return self


class FoodAnalyzeAndLogRequest(FoodAnalyzeRequest):
    meal_type: str = Field("Breakfast", max_length=32)
    corrected: bool = Field(False, description="User edited the analysed items before saving")
    created_at: Optional[str] = None


class FoodAnalyzeAndLogResponse(BaseModel):
    log: FoodLog
    warnings: List[str] = Field(default_factory=list)


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=4000)
    history: List[ChatTurn] = Field(default_factory=list)

    @model_validator(mode="after")
    def _strip(self) -> "ChatRequest":
        self.message = self.message.strip()
        if not self.message:
            raise ValueError("message must not be blank")
        return self


class ChatResponse(BaseModel):
    status: Literal["ok", "degraded"]
    reply: str
    error: Optional[str] = None
