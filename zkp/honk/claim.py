"""
열기 주장(Opening Claim)
=========================

다항식 커밋먼트 스킴(PCS)이 검증하는 단위:
    "커밋먼트 C 가 가리키는 다항식 p 에 대해 p(r) = v 이다."

ZeroMorph는 다중선형 평가 주장들을 하나의 단변수 OpeningClaim으로 줄이고,
KZG는 OpeningClaim을 페어링 점 쌍 (P0, P1)으로 줄인다.

스칼라/점의 표현은 arithmetic backend(curve)에 따른다:
native는 FR과 py_ecc 점, 재귀 모드는 FieldVar와 GroupVar.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class OpeningPair:
    """평가 점과 평가값의 쌍 (r, v)."""
    challenge: Any
    evaluation: Any


@dataclass(frozen=True)
class OpeningClaim:
    """평가 쌍과 커밋먼트 (r, v, C)."""
    opening_pair: OpeningPair
    commitment: Any
