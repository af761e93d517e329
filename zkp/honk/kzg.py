"""
KZG 다항식 커밋먼트 스킴
=========================

Honk에서 KZG는 "기본 열기 검증기(base opening verifier)"이다.
ZeroMorph가 만든 단변수 주장 (r, v, C)를 페어링 점 쌍으로 줄인다.

**커밋먼트**:
  C = Σᵢ cᵢ·[τⁱ]₁ = p(τ)·G1

**열기 증명**:
  W = [(p(X) − v) / (X − r)]₁

**검증 (두 단계로 나눔)**:
  1. reduce_verify: 증명에서 W ("KZG:W")를 읽고
       P0 = C + r·W − v·[1]₁,   P1 = −W
     를 만든다. 이 단계는 native/recursive 공통이다.
  2. pairing_check:
       e(P0, [1]₂) == e(−P1, [τ]₂)
     native 모드에서는 바로 확인하고, recursive 모드에서는 (P0, P1)을
     상위 검증자에게 넘긴다 (지연된 페어링).

  정당성: p(τ) − v = (τ − r)·q(τ) 이므로
    P0 = [p(τ) − v + r·q(τ)]₁ = [τ·q(τ)]₁ 이고, e(P0, [1]₂) = e(W, [τ]₂).

사용 예시:
    >>> C = commit(p, srs)
    >>> W = create_witness(p, FR(7), srs)
"""

import logging

from zkp.honk.commitments import receive_commitment
from zkp.honk.field import FR, ec_mul, ec_add
from zkp.honk.polynomial import Polynomial

LOGGER = logging.getLogger(__name__)


def commit(poly, srs):
    """다항식(또는 계수 리스트)을 KZG 커밋한다.

    C = Σ cᵢ · [τⁱ]₁

    Raises:
        ValueError: 계수 개수가 SRS 크기를 초과할 때
    """
    coeffs = poly.coeffs if isinstance(poly, Polynomial) else list(poly)
    if len(coeffs) > srs.size:
        raise ValueError(
            f"계수 {len(coeffs)}개가 SRS 크기 {srs.size}를 초과합니다"
        )

    result = None  # 항등원
    for i, coeff in enumerate(coeffs):
        if coeff == 0:
            continue
        result = ec_add(result, ec_mul(srs.g1_powers[i], coeff))
    return result


def create_witness(poly, point, srs):
    """열기 증명 W = [(p(X) − p(r)) / (X − r)]₁ 을 만든다.

    Args:
        poly: Polynomial
        point: 평가 점 r (FR 또는 정수)
        srs: SRS
    """
    if not isinstance(point, FR):
        point = FR(point)
    return commit(poly.divide_by_linear(point), srs)


class KZG:
    """KZG 기본 열기 검증기."""

    @staticmethod
    def reduce_verify(claim, transcript, curve):
        """주장 (r, v, C)를 페어링 점 쌍 (P0, P1)로 줄인다.

        Returns:
            (P0, P1) = (C + r·W − v·[1]₁, −W)
        """
        quotient_commitment = receive_commitment(transcript, "KZG:W", curve)
        pair = claim.opening_pair
        P0 = curve.batch_mul(
            [claim.commitment, quotient_commitment, curve.one()],
            [1, pair.challenge, -pair.evaluation],
        )
        P1 = curve.batch_mul([quotient_commitment], [-1])
        return P0, P1

    @staticmethod
    def pairing_check(pcs_verification_key, P0, P1):
        """native 페어링 확인 e(P0, [1]₂) == e(−P1, [τ]₂)."""
        result = pcs_verification_key.pairing_check(P0, P1)
        LOGGER.debug("KZG 페어링 확인: %s", result)
        return result

    @classmethod
    def verify(cls, pcs_verification_key, claim, transcript, curve):
        """native 모드: reduce_verify 후 바로 페어링 확인."""
        P0, P1 = cls.reduce_verify(claim, transcript, curve)
        return cls.pairing_check(pcs_verification_key, P0, P1)
