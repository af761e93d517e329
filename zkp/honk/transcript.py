"""
Honk Fiat-Shamir Transcript
=============================

증명 버퍼를 레이블 순서대로 "재생(replay)"하는 Fiat-Shamir 트랜스크립트.

**재생(replay)이란?**
  Prover는 메시지(커밋먼트, 스칼라)를 레이블과 함께 보내고,
  챌린지는 지금까지의 모든 메시지를 해시하여 얻는다.
  Verifier는 같은 레이블 순서로 증명 버퍼를 소비하며 같은 해시 상태를
  재구성하므로, 같은 챌린지를 얻는다.

  레이블 또는 순서가 하나라도 다르면 이후 모든 챌린지가 달라진다.

**인코딩**:
  - 스칼라: 32바이트 빅엔디안
  - G1 점: x(32바이트) || y(32바이트), 항등원은 64바이트의 0
  - 챌린지: SHA256(state || label) mod r, 이후 digest를 상태에 추가 (체이닝)

**Honk 프로토콜 레이블** (Ultra):
  circuit_size, public_input_size, pub_inputs_offset, public_input_i
  → W_L, W_R, W_O → eta, eta_two, eta_three → SORTED_ACCUM, W_4
  → beta, gamma → Z_PERM, Z_LOOKUP → alpha_i
  → Sumcheck:gate_challenge_i → Sumcheck:univariate_i / Sumcheck:u_i
  → Sumcheck:evaluations → rho → ZM:C_q_k → ZM:y → ZM:C_q → ZM:x, ZM:z → KZG:W

사용 예시:
    >>> prover = Transcript()
    >>> prover.append_scalar("circuit_size", 8)
    >>> eta = prover.get_challenge("eta")
    >>> verifier = Transcript(prover.export_proof())
    >>> verifier.receive_scalar("circuit_size")
    >>> verifier.get_challenge("eta") == eta
    True
"""

import hashlib

from zkp.honk.errors import ProofFormatError
from zkp.honk.field import FR, CURVE_ORDER, FIELD_MODULUS, point_from_affine, point_to_affine
from zkp.honk.proof import HonkProof

# 프로토콜 도메인 분리 레이블
TRANSCRIPT_LABEL = b"honk"


def encode_label(label):
    if isinstance(label, str):
        return label.encode("utf-8")
    return bytes(label)


def encode_scalar(value):
    """FR 원소(또는 정수)를 32바이트 빅엔디안으로 직렬화한다."""
    return (int(value) % CURVE_ORDER).to_bytes(32, "big")


def encode_point(point):
    """G1 점을 x || y 64바이트로 직렬화한다. 항등원(None)은 64바이트의 0."""
    x, y = point_to_affine(point)
    return x.to_bytes(32, "big") + y.to_bytes(32, "big")


class Transcript:
    """SHA-256 기반 Fiat-Shamir 트랜스크립트 (native).

    하나의 객체가 Prover 쪽(append_*, export_proof)과
    Verifier 쪽(receive_*) 역할을 모두 지원한다.
    한 번의 검증 호출은 자기 자신의 트랜스크립트를 독점한다.

    속성:
        state: 현재까지 누적된 해시 입력 바이트열
        proof: 소비할 증명 (Verifier 쪽), 없으면 None
        cursor: 다음에 읽을 원소의 위치
        manifest: ("send" | "receive" | "challenge", label) 항목의 리스트
    """

    def __init__(self, proof=None, label=TRANSCRIPT_LABEL):
        self.state = bytearray()
        self.state.extend(label)
        self.proof = proof
        self.cursor = 0
        self.outgoing = []
        self.manifest = []

    # ─────────────────────────────────────────────────────────────────
    # 상태 흡수 훅 (재귀 트랜스크립트가 재정의)
    # ─────────────────────────────────────────────────────────────────

    def _absorb_bytes(self, data):
        self.state.extend(data)

    def _absorb_scalar(self, value):
        self._absorb_bytes(encode_scalar(value))

    def _absorb_point(self, point):
        self._absorb_bytes(encode_point(point))

    def _load_scalar(self, word):
        return FR(word)

    def _load_point(self, x, y):
        return point_from_affine(x, y)

    # ─────────────────────────────────────────────────────────────────
    # Prover 쪽
    # ─────────────────────────────────────────────────────────────────

    def append_scalar(self, label, scalar):
        """스칼라를 트랜스크립트와 증명 버퍼에 추가한다."""
        self._absorb_bytes(encode_label(label))
        self._absorb_scalar(scalar)
        self.outgoing.append(int(scalar) % CURVE_ORDER)
        self.manifest.append(("send", label))

    def append_scalars(self, label, scalars):
        """스칼라 배열을 하나의 레이블로 추가한다 (sumcheck 단변수 다항식 등)."""
        self._absorb_bytes(encode_label(label))
        for scalar in scalars:
            self._absorb_scalar(scalar)
            self.outgoing.append(int(scalar) % CURVE_ORDER)
        self.manifest.append(("send", label))

    def append_point(self, label, point):
        """G1 점을 추가한다. 항등원은 증명 버퍼에 (0, 0)으로 기록된다."""
        self._absorb_bytes(encode_label(label))
        self._absorb_point(point)
        self.outgoing.extend(point_to_affine(point))
        self.manifest.append(("send", label))

    def export_proof(self):
        """지금까지 추가된 메시지로 증명을 만든다."""
        return HonkProof(list(self.outgoing))

    # ─────────────────────────────────────────────────────────────────
    # Verifier 쪽
    # ─────────────────────────────────────────────────────────────────

    def _consume(self, label, count):
        if self.proof is None:
            raise ProofFormatError("읽을 증명이 없는 트랜스크립트입니다")
        end = self.cursor + count
        if end > len(self.proof):
            raise ProofFormatError(
                f"'{label}'를 읽는 중 증명 버퍼가 소진되었습니다 "
                f"(필요: {end}, 길이: {len(self.proof)})"
            )
        words = self.proof.elements[self.cursor:end]
        self.cursor = end
        return words

    def _read_scalar_word(self, label, word):
        if word >= CURVE_ORDER:
            raise ProofFormatError(f"'{label}'의 스칼라가 필드 범위를 벗어났습니다")
        return self._load_scalar(word)

    def receive_scalar(self, label):
        """다음 스칼라를 읽어 상태에 흡수하고 반환한다."""
        (word,) = self._consume(label, 1)
        value = self._read_scalar_word(label, word)
        self._absorb_bytes(encode_label(label))
        self._absorb_scalar(value)
        self.manifest.append(("receive", label))
        return value

    def receive_scalars(self, label, count):
        """count개의 스칼라를 하나의 레이블로 읽는다."""
        words = self._consume(label, count)
        values = [self._read_scalar_word(label, word) for word in words]
        self._absorb_bytes(encode_label(label))
        for value in values:
            self._absorb_scalar(value)
        self.manifest.append(("receive", label))
        return values

    def receive_point(self, label):
        """다음 G1 점(x, y)을 읽는다.

        좌표 범위만 확인한다. 곡선 소속 확인과 항등원 정규화는
        curve.normalize_commitment 의 몫이다.
        """
        x, y = self._consume(label, 2)
        if x >= FIELD_MODULUS or y >= FIELD_MODULUS:
            raise ProofFormatError(f"'{label}'의 좌표가 기저체 범위를 벗어났습니다")
        point = self._load_point(x, y)
        self._absorb_bytes(encode_label(label))
        self._absorb_point(point)
        self.manifest.append(("receive", label))
        return point

    def assert_consumed(self):
        """증명 버퍼가 정확히 소진되었는지 확인한다."""
        if self.proof is not None and self.cursor != len(self.proof):
            raise ProofFormatError(
                f"증명에 읽지 않은 원소가 {len(self.proof) - self.cursor}개 남아 있습니다"
            )

    # ─────────────────────────────────────────────────────────────────
    # 챌린지
    # ─────────────────────────────────────────────────────────────────

    def get_challenge(self, label):
        """트랜스크립트로부터 챌린지 스칼라를 생성한다.

        생성된 digest는 상태에 추가된다 (체이닝).

        Returns:
            FR: 챌린지
        """
        self._absorb_bytes(encode_label(label))
        digest = hashlib.sha256(bytes(self.state)).digest()
        self.state.extend(digest)
        self.manifest.append(("challenge", label))
        return FR(int.from_bytes(digest, "big") % CURVE_ORDER)

    def get_challenges(self, *labels):
        """레이블 순서대로 챌린지를 하나씩 생성한다."""
        return [self.get_challenge(label) for label in labels]
