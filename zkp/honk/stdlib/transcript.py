"""
회로 안의 Fiat-Shamir 트랜스크립트
====================================

native Transcript와 같은 레이블, 같은 바이트 인코딩, 같은 챌린지 값을 만든다.
차이점:
  - 증명에서 읽은 스칼라/점은 witness 변수(FieldVar/GroupVar)로 할당된다
  - 챌린지도 witness 변수이며, "챌린지 == SHA256(흡수된 조각들) mod r" 이라는
    블랙박스 제약이 빌더에 기록된다

흡수된 조각(parts)은 bytes(레이블), 변수(증명 원소), DigestRef(이전 digest)로
이루어진다. check_circuit()은 변수의 현재 값으로 해시를 다시 계산하므로,
witness를 바꾸면 SHA-256 제약이 깨진다.
"""

import hashlib

from zkp.honk.field import FR, CURVE_ORDER
from zkp.honk.stdlib.builder import DigestRef
from zkp.honk.stdlib.field import FieldVar
from zkp.honk.stdlib.group import GroupVar
from zkp.honk.transcript import Transcript, TRANSCRIPT_LABEL, encode_label


class StdlibTranscript(Transcript):
    """CircuitBuilder에 제약을 기록하는 Verifier 쪽 트랜스크립트."""

    def __init__(self, builder, proof=None, label=TRANSCRIPT_LABEL):
        super().__init__(proof, label)
        self.builder = builder
        self.parts = [bytes(label)]

    def _absorb_bytes(self, data):
        self.parts.append(bytes(data))
        self.state.extend(data)

    def _absorb_scalar(self, value):
        self.parts.append(value)
        self.state.extend(value.to_bytes())

    def _absorb_point(self, point):
        self.parts.append(point)
        self.state.extend(point.to_bytes())

    def _load_scalar(self, word):
        return FieldVar.from_witness(self.builder, FR(word))

    def _load_point(self, x, y):
        return GroupVar.from_witness(self.builder, x, y)

    def get_challenge(self, label):
        """챌린지 witness를 만들고 SHA-256 제약을 기록한다."""
        self._absorb_bytes(encode_label(label))
        digest = hashlib.sha256(bytes(self.state)).digest()
        challenge = FieldVar.from_witness(
            self.builder, FR(int.from_bytes(digest, "big") % CURVE_ORDER)
        )
        index = self.builder.add_sha256_constraint(self.parts, challenge.witness_index)
        self.state.extend(digest)
        self.parts.append(DigestRef(index))
        self.manifest.append(("challenge", label))
        return challenge
