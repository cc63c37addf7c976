# /app/services/taxonomy.py

"""
The fixed observation taxonomy.

`CATEGORIES` maps category -> subcategory -> ordered observation points.
`EXAMPLES` maps category -> subcategory -> point -> ordered example
phrases; a record's `checkedExamples` are indices into that list. Points
without their own phrases fall back to `DEFAULT_EXAMPLES`.

The record store does not validate against any of this. Callers use it to
build forms and to turn checked indices back into text.
"""

from typing import Dict, List

CATEGORIES: Dict[str, Dict[str, List[str]]] = {
    "세특": {
        "듣기말하기": ["경청태도", "발표력", "토론참여"],
        "읽기": ["독해력", "비판적읽기", "독서습관"],
        "쓰기": ["논리적글쓰기", "창의적표현", "맞춤법"],
        "문법": ["문법이해", "어휘활용"],
    },
    "행특": {
        "생활태도": ["성실성", "책임감", "규칙준수"],
        "대인관계": ["협력", "배려", "갈등해결"],
        "학습태도": ["자기주도성", "집중력"],
    },
    "자율": {
        "학급활동": ["역할수행", "학급회의참여"],
        "행사활동": ["행사기획", "행사참여"],
    },
    "진로": {
        "진로탐색": ["흥미탐색", "진로정보수집"],
        "진로설계": ["목표설정", "진로활동참여"],
    },
}

EXAMPLES: Dict[str, Dict[str, Dict[str, List[str]]]] = {
    "세특": {
        "듣기말하기": {
            "경청태도": [
                "친구의 발표를 끝까지 집중하여 들음",
                "들은 내용을 정확하게 요약하여 말함",
                "상대방의 의견에 공감하며 반응함",
                "궁금한 점을 적절한 질문으로 표현함",
            ],
            "발표력": [
                "자신의 생각을 논리적으로 정리하여 발표함",
                "청중을 고려하여 목소리와 속도를 조절함",
                "자료를 효과적으로 활용하여 발표함",
            ],
            "토론참여": [
                "근거를 들어 자신의 주장을 펼침",
                "상대 주장의 허점을 정확히 짚어냄",
                "토론 규칙을 지키며 예의 바르게 참여함",
            ],
        },
        "읽기": {
            "독해력": [
                "글의 중심 내용을 정확하게 파악함",
                "문맥을 통해 낯선 어휘의 의미를 추론함",
            ],
        },
    },
    "행특": {
        "생활태도": {
            "성실성": [
                "맡은 일을 끝까지 책임지고 완수함",
                "과제를 기한 내에 꾸준히 제출함",
            ],
        },
        "대인관계": {
            "협력": [
                "모둠 활동에서 역할을 나누어 협력함",
                "친구의 어려움을 먼저 살피고 도움",
            ],
        },
    },
}

DEFAULT_EXAMPLES: List[str] = [
    "수업에 적극적으로 참여함",
    "과제를 성실하게 수행함",
    "친구들과 원만하게 협력함",
    "자신의 생각을 분명하게 표현함",
]


def get_examples(category: str, sub_category: str, point: str) -> List[str]:
    """Returns the example phrases for a classification, or DEFAULT_EXAMPLES."""
    return EXAMPLES.get(category, {}).get(sub_category, {}).get(point, DEFAULT_EXAMPLES)


def is_valid_classification(category: str, sub_category: str, point: str) -> bool:
    return point in CATEGORIES.get(category, {}).get(sub_category, [])


def checked_phrases(category: str, sub_category: str, point: str, indices: List[int]) -> List[str]:
    """Turns checked indices back into phrases. Out-of-range indices are skipped."""
    examples = get_examples(category, sub_category, point)
    return [examples[i] for i in indices if 0 <= i < len(examples)]
