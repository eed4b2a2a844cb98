"""Instruction text sent to the generative capabilities."""

from __future__ import annotations

import json

from logic.validation import RecommendationRequest
from models.taxonomy import category_labels, season_labels

DEFAULT_LANGUAGE = "中文"

VISUALIZATION_INSTRUCTION = (
    "Based on these clothing items, generate a high-quality, full-body realistic fashion "
    "illustration of a model wearing this complete outfit. The style should be modern and "
    "natural. Show clearly how these items look when worn together."
)


def classification_instruction() -> str:
    """Ask for one JSON object describing the garment in the image."""

    categories = "、".join(category_labels())
    seasons = "、".join(season_labels())
    return (
        "分析这件衣物。识别类别、适用季节、颜色，并提供简短的中文名称和描述。\n"
        "请严格返回有效的 JSON 对象，且只包含以下字段:\n"
        '- "name": 简短的描述性名称 (例如: \'蓝色牛仔夹克\')\n'
        f'- "category": 以下之一: {categories}\n'
        f'- "season": 以下之一: {seasons}\n'
        '- "color": 物品的主要颜色\n'
        '- "description": 关于款式和材质的简短中文描述\n'
        "不要使用 markdown，不要附加解释。"
    )


def recommendation_instruction(request: RecommendationRequest, language: str = DEFAULT_LANGUAGE) -> str:
    """Compose the stylist instruction around the reduced inventory summary."""

    inventory = json.dumps(
        [entry.model_dump() for entry in request.inventory_summary], ensure_ascii=False
    )
    return (
        "你是一位专业的时尚造型师。\n"
        "用户情境:\n"
        f"- 场合: {request.occasion}\n"
        f"- 天气: {request.weather}\n\n"
        "可用衣橱库存 (JSON):\n"
        f"{inventory}\n\n"
        "任务: 从可用库存中选择最佳搭配。\n"
        "规则:\n"
        "1. 选择上装和下装（或连衣裙），如果有鞋子也请选择。\n"
        "2. 确保颜色协调和风格匹配。\n"
        "3. 返回所选物品的确切 ID，不要编造库存中不存在的 ID。\n"
        f"4. 请用{language}回答。\n\n"
        '只返回一个 JSON 对象: {"outfitName": string, "items": [string], "reasoning": string}'
    )


__all__ = [
    "DEFAULT_LANGUAGE",
    "VISUALIZATION_INSTRUCTION",
    "classification_instruction",
    "recommendation_instruction",
]
