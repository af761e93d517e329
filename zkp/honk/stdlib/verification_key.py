"""
재귀 검증 키 어댑터
====================

native 검증 키를 회로 안에서 쓸 수 있는 형태로 바꾼다.
한 builder 안에서 여러 증명을 검증할 때는 한 번 만든 재귀 키를 공유한다 (from_key).

  - 메타데이터(N, 공개 입력 수, offset)는 그대로 (회로 모양을 정하는 상수)
  - 사전계산 커밋먼트는 GroupVar witness로 할당 (빈 열은 무한원점 플래그)
  - PCS 검증 키는 native로 남긴다 (페어링은 회로 밖에서 수행)
"""

from zkp.honk.stdlib.group import GroupVar


class RecursiveVerificationKey:
    """CircuitBuilder에 묶인 검증 키. native 키의 값을 복사하여 만든다."""

    def __init__(self, builder, native_key):
        self.builder = builder
        self.flavor = native_key.flavor
        self.circuit_size = native_key.circuit_size
        self.log_circuit_size = native_key.log_circuit_size
        self.num_public_inputs = native_key.num_public_inputs
        self.pub_inputs_offset = native_key.pub_inputs_offset
        self.pcs_verification_key = native_key.pcs_verification_key
        self.commitments = {
            name: GroupVar.from_native(builder, point)
            for name, point in native_key.commitments.items()
        }

    @classmethod
    def from_key(cls, builder, key):
        """native 키는 변환하고, 이미 만든 재귀 키는 그대로 다시 쓴다.

        Raises:
            ValueError: 재귀 키가 다른 builder에 묶여 있을 때
        """
        if isinstance(key, cls):
            if key.builder is not builder:
                raise ValueError("재귀 검증 키가 다른 CircuitBuilder에 묶여 있습니다")
            return key
        return cls(builder, key)
