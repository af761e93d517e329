"""
Honk 검증 키(Verification Key)
===============================

검증 키는 회로마다 한 번 만들어지고, 이후 모든 검증 호출이 읽기 전용으로 공유한다.

  - flavor: 증명 시스템 변형 (UltraFlavor, MegaFlavor, ECCVMFlavor)
  - circuit_size N (2의 거듭제곱), log_circuit_size d
  - num_public_inputs, pub_inputs_offset
  - commitments: 사전계산 열의 커밋먼트 (이름 → G1 점, 빈 열은 None)
  - pcs_verification_key: KZG 검증에 쓰이는 G2 원소 쌍

재귀 모드의 어댑터는 stdlib/verification_key.py 에 있다.
"""

import logging

from zkp.honk.errors import VerificationKeyError
from zkp.honk.kzg import commit

LOGGER = logging.getLogger(__name__)


def _is_power_of_two(n):
    return n >= 1 and n & (n - 1) == 0


class VerificationKey:
    """native 검증 키. 생성 후 변경하지 않는다."""

    def __init__(self, flavor, circuit_size, num_public_inputs, pub_inputs_offset,
                 commitments, pcs_verification_key):
        """
        Raises:
            VerificationKeyError: 회로 크기가 2의 거듭제곱이 아니거나
                                  사전계산 커밋먼트가 빠졌을 때
        """
        if not _is_power_of_two(circuit_size):
            raise VerificationKeyError(
                f"회로 크기 {circuit_size}는 2의 거듭제곱이어야 합니다"
            )
        missing = [name for name in flavor.PRECOMPUTED if name not in commitments]
        if missing:
            raise VerificationKeyError(f"사전계산 커밋먼트가 없습니다: {missing}")
        if flavor.IS_ECCVM and num_public_inputs:
            raise VerificationKeyError("ECCVM 검증 키는 공개 입력을 가질 수 없습니다")

        self.flavor = flavor
        self.circuit_size = circuit_size
        self.num_public_inputs = num_public_inputs
        self.pub_inputs_offset = pub_inputs_offset
        self.commitments = dict(commitments)
        self.pcs_verification_key = pcs_verification_key

    @property
    def log_circuit_size(self):
        return self.circuit_size.bit_length() - 1

    @classmethod
    def from_precomputed_polynomials(cls, flavor, polynomials, srs, num_public_inputs=0,
                                     pub_inputs_offset=0):
        """사전계산 다항식을 KZG 커밋하여 검증 키를 만든다 (키 생성 도우미).

        Args:
            flavor: Flavor 클래스
            polynomials: 이름 → Polynomial (모두 같은 크기 N)
            srs: SRS
        """
        sizes = {len(polynomials[name]) for name in flavor.PRECOMPUTED}
        if len(sizes) != 1:
            raise VerificationKeyError(f"사전계산 다항식의 크기가 서로 다릅니다: {sizes}")
        (circuit_size,) = sizes

        commitments = {name: commit(polynomials[name], srs) for name in flavor.PRECOMPUTED}
        LOGGER.debug("%s 검증 키 생성: N=%d, 커밋먼트 %d개",
                     flavor.NAME, circuit_size, len(commitments))
        return cls(flavor, circuit_size, num_public_inputs, pub_inputs_offset,
                   commitments, srs.verifier_key())
