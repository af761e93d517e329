"""
Honk Structured Reference String (SRS)
========================================

KZG 커밋먼트를 위한 범용(universal) 신뢰 설정.

  Prover 쪽 (CommitmentKey):   [G1, τ·G1, τ²·G1, ..., τ^(n-1)·G1]
  Verifier 쪽 (VerifierCommitmentKey): [1]₂ = G2, [τ]₂ = τ·G2

Honk의 다항식은 모두 크기 N 이하이므로 SRS 크기 n ≥ N 이면 충분하다.
ZeroMorph의 몫 커밋먼트도 차수 N-1 이하이다.

**보안**:
  τ를 아는 사람은 임의의 거짓 증명을 만들 수 있다.
  여기서는 교육용으로 seed에서 결정론적으로 생성한다.

사용 예시:
    >>> srs = SRS.generate(size=16, seed=42)
    >>> len(srs.g1_powers)
    16
    >>> vk = srs.verifier_key()
"""

import hashlib
import secrets

from zkp.honk.field import FR, G1, G2, CURVE_ORDER, ec_mul, ec_pairing, ec_neg


class VerifierCommitmentKey:
    """KZG 검증에 필요한 G2 원소 쌍 ([1]₂, [τ]₂).

    검증 키(VerificationKey)의 pcs_verification_key 로 공유되며 변경되지 않는다.
    재귀 모드에서도 이 키는 native로 남는다 (페어링은 회로 밖에서 수행).
    """

    def __init__(self, g2, g2_x):
        self.g2 = g2
        self.g2_x = g2_x

    def pairing_check(self, p0, p1):
        """e(P0, [1]₂) · e(P1, [τ]₂) == 1 인지 확인한다.

        P1 = -W 이므로 e(P0, [1]₂) == e(W, [τ]₂) 와 같다.
        """
        return ec_pairing(self.g2, p0) == ec_pairing(self.g2_x, ec_neg(p1))


class SRS:
    """Structured Reference String.

    속성:
        g1_powers: [G1, τ·G1, ..., τ^(size-1)·G1]
        g2_powers: [G2, τ·G2]
        size: 커밋할 수 있는 최대 계수 개수
    """

    def __init__(self, g1_powers, g2_powers):
        self.g1_powers = g1_powers
        self.g2_powers = g2_powers

    @property
    def size(self):
        return len(self.g1_powers)

    @classmethod
    def generate(cls, size, seed=None):
        """SRS를 생성한다.

        Args:
            size: G1 거듭제곱 개수 (회로 크기 N 이상)
            seed: 결정론적 생성을 위한 시드 (교육용)
        """
        if seed is not None:
            h = hashlib.sha256(str(seed).encode()).digest()
            tau_int = int.from_bytes(h, "big") % CURVE_ORDER
        else:
            tau_int = secrets.randbelow(CURVE_ORDER - 1) + 1
        tau = FR(tau_int)

        g1_powers = []
        tau_power = FR(1)
        for _ in range(size):
            g1_powers.append(ec_mul(G1, tau_power))
            tau_power = tau_power * tau

        g2_powers = [G2, ec_mul(G2, tau)]
        return cls(g1_powers, g2_powers)

    def verifier_key(self):
        return VerifierCommitmentKey(self.g2_powers[0], self.g2_powers[1])
