"""
ZeroMorph: 다중선형 → 단변수 열기 환원
=======================================

sumcheck가 끝나면 검증기는 "커밋된 다중선형 다항식들이 점 u에서
주장된 값을 가진다"는 주장들을 갖게 된다. ZeroMorph는 이를
하나의 단변수 열기 주장 "ζ_x + z·Z_x 가 X = x 에서 0" 으로 바꾼다.

**핵심 항등식** (n = d, N = 2^n):
  f(X) − v·Φ_n(X) = Σₖ (X^{2^k}·Φ_{n−k−1}(X^{2^{k+1}}) − uₖ·Φ_{n−k}(X^{2^k})) · qₖ(X)
  여기서 Φ_m(X) = (X^{2^m} − 1)/(X − 1) = 1 + X + ... + X^{2^m − 1}

**프로토콜** (검증기 쪽):
  1. rho ← 챌린지; 배치 평가값 v = Σ ρⁱ·vᵢ + Σ ρ^{m+j}·wⱼ
  2. ZM:C_q_k (k = 0..n−1) 수신
  3. y ← 챌린지
  4. ZM:C_q 수신 (차수 조정된 배치 몫 q̂ 의 커밋먼트)
  5. x, z ← 챌린지
  6. C_ζ_x = C_q − Σₖ y^k·x^{N − 2^k}·C_q_k
     C_Z_x = −v·x·Φ_n(x)·[1] + x·Σ ρⁱ[fᵢ] + Σ ρ^{m+j}[gⱼ]
             − x·Σₖ (x^{2^k}·Φ_{n−k−1}(x^{2^{k+1}}) − uₖ·Φ_{n−k}(x^{2^k}))·C_q_k
  7. 주장: (x, 0, C_ζ_x + z·C_Z_x)

시프트된 다항식 gⱼ_shift = gⱼ/X 이므로 [gⱼ]에는 x를 곱하지 않는다
(Z_x 전체가 x로 스케일되어 있다).
"""

import logging

from zkp.honk.claim import OpeningClaim, OpeningPair
from zkp.honk.commitments import receive_commitment
from zkp.honk.field import divide_nonzero

LOGGER = logging.getLogger(__name__)


def _divide(numerator, denominator, what):
    return divide_nonzero(numerator, denominator, f"ZeroMorph {what}")


def compute_batched_evaluation(unshifted_evaluations, shifted_evaluations, rho):
    """v = Σ ρⁱ·vᵢ + Σ ρ^{m+j}·wⱼ (ρ⁰ = 1)."""
    batched = None
    rho_pow = None
    for value in list(unshifted_evaluations) + list(shifted_evaluations):
        term = value if rho_pow is None else value * rho_pow
        batched = term if batched is None else batched + term
        rho_pow = rho if rho_pow is None else rho_pow * rho
    return batched


def compute_C_zeta_x(C_q, C_q_k, y_challenge, x_challenge, circuit_size, curve):
    """C_ζ_x = C_q − Σₖ y^k·x^{N − 2^k}·C_q_k."""
    scalars = [1]
    commitments = [C_q]
    y_pow = None
    for k, commitment in enumerate(C_q_k):
        x_term = x_challenge ** (circuit_size - (1 << k))
        scalar = x_term if y_pow is None else y_pow * x_term
        scalars.append(-scalar)
        commitments.append(commitment)
        y_pow = y_challenge if y_pow is None else y_pow * y_challenge
    return curve.batch_mul(commitments, scalars)


def compute_C_Z_x(f_commitments, g_commitments, C_q_k, rho, batched_evaluation,
                  x_challenge, u_challenge, g1_identity, circuit_size, curve):
    """C_Z_x 를 하나의 MSM으로 계산한다."""
    phi_numerator = x_challenge ** circuit_size - 1
    phi_n_x = _divide(phi_numerator, x_challenge - 1, "Φ_n(x)")

    scalars = [-(batched_evaluation * x_challenge * phi_n_x)]
    commitments = [g1_identity]

    rho_pow = None
    for commitment in f_commitments:
        scalars.append(x_challenge if rho_pow is None else x_challenge * rho_pow)
        commitments.append(commitment)
        rho_pow = rho if rho_pow is None else rho_pow * rho
    for commitment in g_commitments:
        scalars.append(rho_pow if rho_pow is not None else x_challenge.one())
        commitments.append(commitment)
        rho_pow = rho if rho_pow is None else rho_pow * rho

    x_pow_2k = x_challenge
    x_pow_2kp1 = x_challenge * x_challenge
    for k, commitment in enumerate(C_q_k):
        phi_term_1 = _divide(phi_numerator, x_pow_2kp1 - 1, f"Φ_(n-{k}-1)")
        phi_term_2 = _divide(phi_numerator, x_pow_2k - 1, f"Φ_(n-{k})")
        scalar = x_pow_2k * phi_term_1 - u_challenge[k] * phi_term_2
        scalars.append(-(scalar * x_challenge))
        commitments.append(commitment)
        x_pow_2k = x_pow_2kp1
        x_pow_2kp1 = x_pow_2kp1 * x_pow_2kp1

    return curve.batch_mul(commitments, scalars)


class ZeroMorphVerifier:
    """ZeroMorph 열기 환원의 검증기 쪽."""

    @staticmethod
    def verify(unshifted_commitments, to_be_shifted_commitments,
               unshifted_evaluations, shifted_evaluations,
               multivariate_challenge, g1_identity, transcript, curve):
        """다중선형 평가 주장들을 하나의 단변수 OpeningClaim으로 줄인다.

        Returns:
            OpeningClaim: (x, 0, C_ζ_x + z·C_Z_x)
        """
        log_n = len(multivariate_challenge)
        circuit_size = 1 << log_n

        rho = transcript.get_challenge("rho")
        batched_evaluation = compute_batched_evaluation(
            unshifted_evaluations, shifted_evaluations, rho
        )

        C_q_k = [receive_commitment(transcript, f"ZM:C_q_{k}", curve) for k in range(log_n)]
        y_challenge = transcript.get_challenge("ZM:y")
        C_q = receive_commitment(transcript, "ZM:C_q", curve)
        x_challenge, z_challenge = transcript.get_challenges("ZM:x", "ZM:z")

        C_zeta_x = compute_C_zeta_x(C_q, C_q_k, y_challenge, x_challenge, circuit_size, curve)
        C_Z_x = compute_C_Z_x(
            unshifted_commitments, to_be_shifted_commitments, C_q_k, rho,
            batched_evaluation, x_challenge, multivariate_challenge, g1_identity,
            circuit_size, curve,
        )
        C_zeta_Z = curve.batch_mul([C_zeta_x, C_Z_x], [1, z_challenge])

        LOGGER.debug("ZeroMorph 환원 완료: 몫 커밋먼트 %d개", log_n)
        return OpeningClaim(OpeningPair(x_challenge, curve.scalar(0)), C_zeta_Z)
