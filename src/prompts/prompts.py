"""Agent instructions and stage prompts for the recipe workflow.

Two personas (Ingredient Analyst, Recipe Crafter) and two prompt builders, one
per workflow stage. Each prompt embeds its upstream input as pretty-printed JSON
and spells out the exact JSON shape expected back. All text is Chinese, and so
is the expected output.

Prompt builders are deterministic: the same input always yields the same prompt.
"""

import json

from src.models.models import IngredientPlan, RecipeRequest


INGREDIENT_AGENT_INSTRUCTIONS = """
你是一名专业的食材分析师，善于根据现有食材、味型偏好以及饮食限制，提出最合适的烹饪思路。

在构思时请遵循以下原则：
- 优先理解食材的结构、风味角色和互补关系
- 告诉用户哪些食材需要预处理（焯水、腌制、去腥等）
- 如果发现味型缺失，提出可选的补充或替代方案
- 输出要简洁、有条理，方便后续步骤进一步生成食谱
"""

RECIPE_AGENT_INSTRUCTIONS = """
你是一名专业主厨，收到经过整理的食材分析后，需要生成可直接烹饪的菜谱。

标准要求：
- 以家庭厨房常见的器具和火力为前提，必要时说明替代方案
- 所有配方都应给出份量、火候/时间节点以及口味调整提示
- 针对用户的口味偏好，解释每一步如何服务该味型
- 输出时保持结构清晰，方便用户一步步跟做
"""


INGREDIENT_PLAN_SHAPE = """{
  "normalizedIngredients": [
    { "name": "string", "category": "protein | vegetable | carb | condiment | garnish | other", "prep": "string", "flavorRole": "string" }
  ],
  "missingItems": [
    { "item": "string", "reason": "string", "substitution": "string" }
  ],
  "tasteDirection": {
    "requestedProfile": "string",
    "balanceNotes": ["string"],
    "aromatics": ["string"]
  },
  "servings": number,
  "dietaryNotes": "string"
}"""

RECIPE_OUTPUT_SHAPE = """{
  "recipeName": "string",
  "servings": number,
  "overview": "string",
  "ingredientList": [
    { "item": "string", "quantity": "string", "prep": "string", "purpose": "string" }
  ],
  "steps": [
    { "order": number, "instruction": "string", "timing": "string", "tasteFocus": "string" }
  ],
  "finishingTouches": ["string"],
  "tastingNotes": ["string"]
}"""


def _to_json(payload: dict) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)


def build_ingredient_plan_prompt(request: RecipeRequest) -> str:
    """Build the stage 1 prompt asking for a structured ingredient plan.

    Args:
        request: Validated caller request.

    Returns:
        Prompt text for a single user-role message.
    """
    return f"""
你将收到一组家庭厨房可用的食材信息与口味偏好，请输出严格 JSON（不要添加说明文字），结构如下：
{INGREDIENT_PLAN_SHAPE}

规则：
- 如果用户未提供某些调味料，但为了达到口味有必要，请放在 missingItems，并注明替代方案
- prep 字段要指出具体处理方式（如“切丝”“冷水下锅焯30秒”）
- flavorRole 用简短文字描述该食材在味型中的作用
- 所有文本使用中文
- 仅返回 JSON

原始输入：
{_to_json(request.to_wire())}
"""


def build_recipe_prompt(plan: IngredientPlan) -> str:
    """Build the stage 2 prompt asking for the final recipe.

    Args:
        plan: Back-filled ingredient plan from stage 1, embedded verbatim.

    Returns:
        Prompt text for a single user-role message.
    """
    return f"""
你将得到一道菜的原料规划，请基于这些信息生成结构化 JSON（不要额外解释），必须符合：
{RECIPE_OUTPUT_SHAPE}

准则：
- steps 至少 5 步，覆盖准备、烹饪和收尾；timing 写具体分钟或火候
- 所有用量请给出具体单位（克、毫升、茶匙等），如未知可给“适量”并说明判断方法
- 在 overview 中概括口味与口感
- tastingNotes 解释最终味型如何对应用户需求
- 所有文本使用中文
- 仅输出 JSON

食材规划：
{_to_json(plan.to_wire())}
"""
