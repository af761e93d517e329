"""
Native 산술 백엔드 (BN254)
===========================

검증기의 프로토콜 코드는 스칼라/점을 직접 만들지 않고 "백엔드(curve)"를 통해 다룬다.
같은 프로토콜 스크립트가 두 백엔드 위에서 돌아간다.

  BN254        (이 모듈)          스칼라 = FR, 점 = py_ecc 점, 판정 = bool
  StdlibBN254  (stdlib/curve.py)  스칼라 = FieldVar, 점 = GroupVar, 판정 = 제약

공통 인터페이스:
  scalar(v), one(), batch_mul(points, scalars), check_equal(a, b, msg),
  normalize_commitment(point), create_transcript(proof)
"""

from zkp.honk.errors import ProofFormatError
from zkp.honk.field import FR, G1, CURVE_ORDER, ec_batch_mul, is_on_curve
from zkp.honk.transcript import Transcript


class BN254:
    """native 모드 백엔드."""

    def scalar(self, value):
        if isinstance(value, FR):
            return value
        return FR(int(value) % CURVE_ORDER)

    def one(self):
        """[1]₁ (G1 생성자)."""
        return G1

    def batch_mul(self, points, scalars):
        return ec_batch_mul(points, scalars)

    def check_equal(self, a, b, msg=""):
        return a == b

    def normalize_commitment(self, point):
        """증명에서 읽은 점을 정규화한다.

        (0, 0)은 항등원(None)으로 바꾸고, 그 밖의 곡선 밖 점은 형식 오류이다.

        Raises:
            ProofFormatError: 곡선 위에 없는 (0, 0)이 아닌 점
        """
        if point is None:
            return None
        x, y = int(point[0]), int(point[1])
        if x == 0 and y == 0:
            return None
        if not is_on_curve(point):
            raise ProofFormatError(f"곡선 위에 있지 않은 점입니다: ({x}, {y})")
        return point

    def create_transcript(self, proof):
        return Transcript(proof)
