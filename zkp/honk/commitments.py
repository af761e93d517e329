"""
커밋먼트 수신(Commitment Intake)
=================================

증명에서 witness 커밋먼트를 프로토콜 순서대로 읽고,
검증 키의 사전계산 커밋먼트와 합쳐 하나의 컬렉션으로 관리한다.

**무한원점 정규화**:
  빈 열(예: 사용하지 않은 return_data)의 커밋먼트는 항등원이며,
  증명에는 좌표 (0, 0)으로 들어 있다. 읽는 즉시 항등원으로 표시한다.
    - native: None
    - recursive: is_point_at_infinity 플래그가 켜진 GroupVar
  (0, 0)이 아닌 곡선 밖의 점은 ProofFormatError 이다.

**수신 순서 (Ultra/Mega)**:
  1. W_L, W_R, W_O (+ Mega: ECC_OP_WIRE_1..4, CALLDATA, CALLDATA_READ_COUNTS,
     RETURN_DATA, RETURN_DATA_READ_COUNTS)
  2. eta, eta_two, eta_three 다음: SORTED_ACCUM, W_4
  3. beta, gamma 다음: (Mega) CALLDATA_INVERSES, RETURN_DATA_INVERSES
  4. 델타 계산 다음: Z_PERM, Z_LOOKUP
"""

from zkp.honk.errors import ProofFormatError
from zkp.honk.flavor import label_for


def receive_commitment(transcript, label, curve):
    """점 하나를 읽어 정규화한다."""
    return curve.normalize_commitment(transcript.receive_point(label))


class VerifierCommitments:
    """검증기 쪽 커밋먼트 컬렉션.

    사전계산 커밋먼트는 검증 키에서, witness 커밋먼트는 증명에서 온다.
    두 이름 집합은 서로소이며, 한 번의 검증 호출 동안만 살아 있다.
    """

    def __init__(self, flavor, key_commitments):
        self.flavor = flavor
        self.precomputed = {name: key_commitments[name] for name in flavor.PRECOMPUTED}
        self.witness = {}

    def receive_batch(self, transcript, names, curve):
        """이름 묶음을 순서대로 받는다. 레이블은 대문자 이름이다."""
        for name in names:
            if name in self.witness:
                raise ProofFormatError(f"커밋먼트 '{name}'를 두 번 받았습니다")
            self.witness[name] = receive_commitment(transcript, label_for(name), curve)

    def __getitem__(self, name):
        if name in self.precomputed:
            return self.precomputed[name]
        return self.witness[name]

    def get_unshifted(self):
        """precomputed 다음 witness, Flavor 순서."""
        return [self[name] for name in self.flavor.unshifted()]

    def get_to_be_shifted(self):
        return [self[name] for name in self.flavor.TO_BE_SHIFTED]
