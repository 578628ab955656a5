"""Shared fixtures for unit tests.

Provides a scripted fake generation capability and canned model answers so the
workflow can be exercised without calling Gemini.
"""

import json

import pytest

from src.agents.agent import AgentRegistry, GenerationResult


class ScriptedCapability:
    """Fake capability answering from a fixed script of texts or exceptions."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.session_ids = []

    async def generate(self, messages, session_id=None):
        self.calls.append(messages)
        self.session_ids.append(session_id)
        if not self.responses:
            raise AssertionError("ScriptedCapability called more times than scripted")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return GenerationResult(text=response)


PLAN_PAYLOAD = {
    "normalizedIngredients": [
        {"name": "鸡胸肉", "category": "protein", "prep": "切丝，用淀粉和料酒腌10分钟", "flavorRole": "主体蛋白，吸收酱汁"},
        {"name": "青椒", "category": "vegetable", "prep": "去籽切丝", "flavorRole": "提供清香和微辣"},
    ],
    "missingItems": [
        {"item": "干辣椒", "reason": "补足辣味层次", "substitution": "辣椒粉"},
    ],
    "tasteDirection": {
        "requestedProfile": "微辣",
        "balanceNotes": ["少量糖平衡辣味"],
        "aromatics": ["蒜", "姜"],
    },
    "servings": 2,
}

RECIPE_PAYLOAD = {
    "recipeName": "青椒鸡丝",
    "servings": 2,
    "overview": "鸡丝嫩滑，青椒爽脆，整体微辣带清香。",
    "ingredientList": [
        {"item": "鸡胸肉", "quantity": "250克", "prep": "切丝", "purpose": "主料"},
        {"item": "青椒", "quantity": "2个", "prep": "切丝", "purpose": "配菜"},
        {"item": "盐", "quantity": "适量", "purpose": "调味，尝味后补加"},
    ],
    "steps": [
        {"order": 1, "instruction": "鸡丝加料酒、淀粉抓匀腌制", "timing": "10分钟"},
        {"order": 2, "instruction": "青椒去籽切丝备用", "timing": "3分钟"},
        {"order": 3, "instruction": "热锅凉油滑炒鸡丝至变白盛出", "timing": "中火2分钟", "tasteFocus": "保持嫩滑"},
        {"order": 4, "instruction": "爆香蒜姜和干辣椒", "timing": "小火30秒", "tasteFocus": "建立微辣底味"},
        {"order": 5, "instruction": "下青椒和鸡丝大火翻炒，加盐调味出锅", "timing": "大火1分钟"},
    ],
    "finishingTouches": ["出锅前淋少许香油"],
    "tastingNotes": ["辣味轻柔，不压鸡肉鲜味"],
}


def fenced(payload: dict, preamble: str = "好的，以下是结果：") -> str:
    """Wrap a payload the way chat models usually answer."""
    return f"{preamble}\n```json\n{json.dumps(payload, ensure_ascii=False, indent=2)}\n```\n希望对你有帮助！"


@pytest.fixture
def fence():
    return fenced


@pytest.fixture
def plan_payload() -> dict:
    return json.loads(json.dumps(PLAN_PAYLOAD))


@pytest.fixture
def recipe_payload() -> dict:
    return json.loads(json.dumps(RECIPE_PAYLOAD))


@pytest.fixture
def request_data() -> dict:
    return {"ingredients": ["鸡胸肉", "青椒"], "taste": "微辣", "servings": 2}


@pytest.fixture
def make_registry():
    """Build a registry with one ScriptedCapability per agent name."""

    def _make(**scripts):
        capabilities = {name: ScriptedCapability(*responses) for name, responses in scripts.items()}
        return AgentRegistry(capabilities), capabilities

    return _make
