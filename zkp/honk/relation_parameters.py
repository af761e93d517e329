"""
관계식 파라미터(Relation Parameters) 유도
==========================================

트랜스크립트 챌린지(η, η₂, η₃, β, γ)와 공개 입력으로부터
관계식이 사용하는 파라미터 묶음을 만든다.

**공개 입력 델타 δ_pub**:
  공개 입력 행의 복사 제약은 회로 밖(검증기)에서 알려진 값에 묶인다.
  grand product의 분자/분모에서 공개 입력 항만 따로 곱하여 그 비를 구한다.

    numerator_acc   = γ + β·(N + offset),   매 입력마다 +β
    denominator_acc = γ − β·(1 + offset),   매 입력마다 −β
    δ_pub = Πᵢ (xᵢ + numerator_accᵢ) / Πᵢ (xᵢ + denominator_accᵢ)

**룩업 델타 δ_lookup** = (γ·(1+β))^N

**ECCVM 집합 순열 델타** = 1 / (γ·(γ+β²)·(γ+2β²)·(γ+3β²))
  곱이 0이면 역원이 없으므로 DegenerateChallengeError.

모든 함수는 FR(native)과 FieldVar(recursive) 양쪽에서 동작한다.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from zkp.honk.field import divide_nonzero

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelationParameters:
    """한 번의 검증 호출 동안 변하지 않는 관계식 파라미터."""
    eta: Any = None
    eta_two: Any = None
    eta_three: Any = None
    beta: Any = None
    gamma: Any = None
    public_input_delta: Any = None
    lookup_grand_product_delta: Any = None
    beta_sqr: Optional[Any] = None
    beta_cube: Optional[Any] = None
    eccvm_set_permutation_delta: Optional[Any] = None


def compute_public_input_delta(public_inputs, beta, gamma, domain_size, offset=0):
    """공개 입력 델타 δ_pub 를 계산한다.

    Args:
        public_inputs: 공개 입력 스칼라 리스트
        beta, gamma: 순열 챌린지
        domain_size: 회로 크기 N
        offset: 공개 입력이 시작하는 행

    Returns:
        δ_pub (공개 입력이 없으면 1)

    Raises:
        DegenerateChallengeError: 분모 곱이 0일 때
    """
    numerator = beta.one()
    denominator = beta.one()

    numerator_acc = gamma + beta * (domain_size + offset)
    denominator_acc = gamma - beta * (1 + offset)

    for x in public_inputs:
        numerator = numerator * (numerator_acc + x)
        denominator = denominator * (denominator_acc + x)
        numerator_acc = numerator_acc + beta
        denominator_acc = denominator_acc - beta

    return divide_nonzero(numerator, denominator, "공개 입력 델타")


def compute_lookup_grand_product_delta(beta, gamma, domain_size):
    """δ_lookup = (γ·(1+β))^N."""
    gamma_by_one_plus_beta = gamma * (1 + beta)
    return gamma_by_one_plus_beta ** domain_size


def compute_eccvm_set_permutation_delta(beta, gamma):
    """δ_eccvm = 1 / (γ·(γ+β²)·(γ+2β²)·(γ+3β²)).

    Raises:
        DegenerateChallengeError: 곱이 0일 때 (역원 없음)
    """
    beta_sqr = beta * beta
    product = gamma * (gamma + beta_sqr) * (gamma + beta_sqr * 2) * (gamma + beta_sqr * 3)
    return divide_nonzero(1, product, "ECCVM 집합 순열 델타 1 / γ(γ+β²)(γ+2β²)(γ+3β²)")


def derive_relation_parameters(eta, eta_two, eta_three, beta, gamma, public_inputs,
                               circuit_size, pub_inputs_offset):
    """Ultra/Mega 파라미터 묶음을 만든다."""
    public_input_delta = compute_public_input_delta(
        public_inputs, beta, gamma, circuit_size, pub_inputs_offset
    )
    lookup_delta = compute_lookup_grand_product_delta(beta, gamma, circuit_size)
    LOGGER.debug("관계식 파라미터 유도: 공개 입력 %d개, N=%d", len(public_inputs), circuit_size)
    return RelationParameters(
        eta=eta, eta_two=eta_two, eta_three=eta_three,
        beta=beta, gamma=gamma,
        public_input_delta=public_input_delta,
        lookup_grand_product_delta=lookup_delta,
    )


def derive_eccvm_relation_parameters(beta, gamma):
    """ECCVM 파라미터 묶음을 만든다 (β², β³, δ_eccvm 포함)."""
    beta_sqr = beta * beta
    return RelationParameters(
        beta=beta, gamma=gamma,
        beta_sqr=beta_sqr,
        beta_cube=beta_sqr * beta,
        eccvm_set_permutation_delta=compute_eccvm_set_permutation_delta(beta, gamma),
    )
