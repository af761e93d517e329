"""
재귀(in-circuit) 산술 백엔드 (StdlibBN254)
===========================================

native BN254 백엔드와 같은 인터페이스를 CircuitBuilder 위에서 제공한다.

  - scalar(v): 회로 상수 FieldVar
  - one(): 상수 [1]₁ GroupVar
  - batch_mul: ECC 연산 큐에 기록되는 MSM
  - check_equal: 동등성 제약을 추가하고, witness 수준의 참/거짓을 돌려준다
    (호출자는 이 값으로 판정을 내리지 않는다. 판정은 회로 만족 여부이다)
"""

from zkp.honk.field import FR, G1, CURVE_ORDER
from zkp.honk.stdlib.field import FieldVar
from zkp.honk.stdlib.group import GroupVar
from zkp.honk.stdlib.transcript import StdlibTranscript


class StdlibBN254:
    """recursive 모드 백엔드."""

    def __init__(self, builder):
        self.builder = builder

    def scalar(self, value):
        if isinstance(value, FieldVar):
            return value
        return FieldVar(self.builder, FR(int(value) % CURVE_ORDER))

    def one(self):
        return GroupVar.from_native(self.builder, G1, is_constant=True)

    def batch_mul(self, points, scalars):
        return GroupVar.batch_mul(points, scalars)

    def check_equal(self, a, b, msg=""):
        a = self.scalar(a)
        a.assert_equal(b, msg or "check_equal")
        return a.get_value() == self.scalar(b).get_value()

    def normalize_commitment(self, point):
        """GroupVar.from_witness 에서 이미 항등원 플래그와 곡선 검사를 마쳤다."""
        return point

    def create_transcript(self, proof):
        return StdlibTranscript(self.builder, proof)
