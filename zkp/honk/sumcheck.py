"""
Sumcheck 검증기
================

Prover의 주장:  Σ_{x ∈ {0,1}^d}  pow_β(x) · F(P₁(x), ..., P_m(x)) = 0
(F는 관계식들의 배치 합, pow_β는 게이트 챌린지로 만든 가중치 다항식)

**라운드 i** (i = 0, ..., d-1):
  1. 단변수 다항식 Sᵢ(X)의 평가값 [Sᵢ(0), ..., Sᵢ(L-1)] 을 받는다
     (레이블 "Sumcheck:univariate_i", L = BATCHED_RELATION_PARTIAL_LENGTH)
  2. Sᵢ(0) + Sᵢ(1) == 목표값 확인 (첫 라운드 목표값은 0)
  3. 챌린지 uᵢ 를 뽑는다 ("Sumcheck:u_i")
  4. 새 목표값 = Sᵢ(uᵢ) (무게중심 보간)

**마지막 확인**:
  모든 엔티티의 주장된 평가값을 받는다 ("Sumcheck:evaluations",
  unshifted 다음 shifted 순서). 관계식을 이 값들로 계산하여

    pow_β(u) · Σ_{독립} cⱼ·Rⱼ + Σ_{종속} cⱼ·Rⱼ == 목표값

  을 확인한다. c₀ = 1, 나머지 cⱼ는 부분관계식 분리자(separator)이다.

d = 0 (회로 크기 1)이면 라운드가 없고 목표값은 0이다.
변수 0은 초입방체 인덱스의 최하위 비트이다.

사용 예시:
    >>> verifier = SumcheckVerifier(UltraFlavor, 3, transcript, BN254())
    >>> output = verifier.verify(params, alphas, gate_challenges)
    >>> output.verified
    True
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from zkp.honk.field import FR

LOGGER = logging.getLogger(__name__)


@dataclass
class SumcheckOutput:
    """sumcheck의 결과: 다변수 챌린지, 주장된 평가값, 판정."""
    challenge: List[Any]
    claimed_evaluations: Dict[str, Any]
    verified: bool


def compute_pow_polynomial_evaluation(gate_challenges, multivariate_challenge, one):
    """pow_β(u) = Πₖ ((1 − uₖ) + uₖ·βₖ).

    Args:
        gate_challenges: β₀, ..., β_{d-1}
        multivariate_challenge: u₀, ..., u_{d-1}
        one: 곱의 단위원 (백엔드의 스칼라 1)
    """
    result = one
    for beta_k, u_k in zip(gate_challenges, multivariate_challenge):
        result = result * ((1 - u_k) + u_k * beta_k)
    return result


def _barycentric_weights(length):
    """wᵢ = 1 / Π_{j≠i} (i − j),  i = 0..length-1 (정수 표현)."""
    weights = []
    for i in range(length):
        denominator = FR(1)
        for j in range(length):
            if j != i:
                denominator = denominator * (i - j)
        weights.append(int(FR(1) / denominator))
    return weights


def barycentric_evaluate(evaluations, point):
    """{0, ..., L-1}에서의 평가값으로 정의된 단변수 다항식을 point에서 평가한다.

        S(u) = Π_j (u − j) · Σᵢ wᵢ·S(i) / (u − i)

    point가 정의역 안의 값이면 해당 평가값을 그대로 돌려준다.
    """
    length = len(evaluations)
    if int(point) < length:
        return evaluations[int(point)]

    weights = _barycentric_weights(length)
    numerator = None
    total = None
    for i, (evaluation, weight) in enumerate(zip(evaluations, weights)):
        term = evaluation * weight / (point - i)
        total = term if total is None else total + term
        factor = point - i
        numerator = factor if numerator is None else numerator * factor
    return total * numerator


class SumcheckVerifier:
    """한 번의 검증 호출에 묶인 sumcheck 검증기.

    속성:
        flavor: Flavor 클래스
        multivariate_d: 변수 개수 d = log₂(N)
        transcript: 트랜스크립트 (native 또는 stdlib)
        curve: 산술 백엔드
    """

    def __init__(self, flavor, multivariate_d, transcript, curve):
        self.flavor = flavor
        self.multivariate_d = multivariate_d
        self.transcript = transcript
        self.curve = curve

    def compute_full_relation_purported_value(self, values, params, separators, pow_evaluation):
        """pow·Σ_{독립} cⱼ·Rⱼ + Σ_{종속} cⱼ·Rⱼ  (c₀ = 1, cⱼ = separators[j-1])."""
        subrelations = []
        for relation in self.flavor.RELATIONS:
            subrelations.extend(relation.accumulate(values, params))
        flags = self.flavor.subrelation_linearly_independent()

        independent = None
        dependent = None
        for j, (value, linearly_independent) in enumerate(zip(subrelations, flags)):
            term = value if j == 0 else value * separators[j - 1]
            if linearly_independent:
                independent = term if independent is None else independent + term
            else:
                dependent = term if dependent is None else dependent + term

        result = pow_evaluation * independent
        if dependent is not None:
            result = result + dependent
        return result

    def verify(self, params, separators, gate_challenges):
        """sumcheck를 재생하고 SumcheckOutput을 돌려준다.

        Args:
            params: RelationParameters
            separators: 부분관계식 분리자 (개수 = 부분관계식 수 − 1)
            gate_challenges: pow 다항식의 β (개수 = d)

        Returns:
            SumcheckOutput
        """
        length = self.flavor.batched_relation_partial_length()
        if len(separators) != self.flavor.num_subrelations() - 1:
            raise ValueError(
                f"분리자 개수 {len(separators)}가 부분관계식 수와 맞지 않습니다"
            )

        verified = True
        target = self.curve.scalar(0)
        multivariate_challenge = []
        for round_idx in range(self.multivariate_d):
            univariate = self.transcript.receive_scalars(f"Sumcheck:univariate_{round_idx}", length)
            round_ok = self.curve.check_equal(univariate[0] + univariate[1], target,
                                              f"sumcheck round {round_idx}")
            if not round_ok:
                LOGGER.debug("sumcheck 라운드 %d: S(0)+S(1)이 목표값과 다릅니다", round_idx)
            verified = verified and round_ok

            u = self.transcript.get_challenge(f"Sumcheck:u_{round_idx}")
            multivariate_challenge.append(u)
            target = barycentric_evaluate(univariate, u)

        evaluations = self.transcript.receive_scalars(
            "Sumcheck:evaluations", self.flavor.num_all_entities()
        )
        values = dict(zip(self.flavor.all_entities(), evaluations))

        pow_evaluation = compute_pow_polynomial_evaluation(
            gate_challenges, multivariate_challenge, self.curve.scalar(1)
        )
        full_value = self.compute_full_relation_purported_value(
            values, params, separators, pow_evaluation
        )
        final_ok = self.curve.check_equal(full_value, target, "sumcheck final relation check")
        if not final_ok:
            LOGGER.debug("sumcheck 최종 관계식 확인 실패")
        verified = verified and final_ok

        LOGGER.debug("sumcheck 완료: %d 라운드, 판정=%s", self.multivariate_d, verified)
        return SumcheckOutput(multivariate_challenge, values, verified)
