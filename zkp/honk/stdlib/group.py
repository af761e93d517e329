"""
회로 안의 그룹 원소 (GroupVar)
===============================

goblin 스타일의 G1 원소. 좌표를 비원생(non-native) 필드 연산으로 풀지 않고,
native 점 값을 들고 다니면서 모든 그룹 연산을 빌더의 ECC 연산 큐에 기록한다.
큐는 check_circuit()에서 재생되어 확인된다.

**무한원점(point at infinity) 처리**:
  증명 안에서 항등원은 좌표 (0, 0)으로 인코딩된다. (0, 0)은 곡선 위의 점이
  아니므로, 받은 즉시 is_point_at_infinity 플래그를 세우고 값은 None으로 둔다.
  그 밖의 곡선 밖 좌표는 형식 오류이다.

사용 예시:
    >>> builder = CircuitBuilder()
    >>> P = GroupVar.from_witness(builder, *point_to_affine(G1))
    >>> Q = GroupVar.batch_mul([P, P], [FR(2), FR(3)])   # 5·G1, 큐에 기록
    >>> builder.check_circuit()
    True
"""

from zkp.honk.errors import ProofFormatError
from zkp.honk.field import is_on_curve, point_from_affine, ec_batch_mul, IDENTITY_ENCODING
from zkp.honk.stdlib.builder import EccOp, scalar_value
from zkp.honk.transcript import encode_point


class GroupVar:
    """빌더에 연결된 G1 원소.

    속성:
        builder: CircuitBuilder
        value: native py_ecc 점 (무한원점이면 None)
        is_point_at_infinity: 항등원 플래그
        is_constant: 회로 상수인지 (검증 키의 [1]₁ 등)
    """

    def __init__(self, builder, value, is_constant=False):
        self.builder = builder
        self.value = value
        self.is_point_at_infinity = value is None
        self.is_constant = is_constant

    @classmethod
    def from_witness(cls, builder, x, y):
        """증명에서 읽은 좌표로 witness 점을 만든다.

        Raises:
            ProofFormatError: (0, 0)이 아닌 곡선 밖의 점
        """
        if (int(x), int(y)) == IDENTITY_ENCODING:
            return cls(builder, None)
        point = point_from_affine(x, y)
        if not is_on_curve(point):
            raise ProofFormatError(f"곡선 위에 있지 않은 점입니다: ({int(x)}, {int(y)})")
        return cls(builder, point)

    @classmethod
    def from_native(cls, builder, point, is_constant=False):
        """native 점(None 포함)을 그대로 GroupVar로 만든다."""
        return cls(builder, point, is_constant=is_constant)

    def get_value(self):
        return self.value

    def to_bytes(self):
        return encode_point(self.value)

    @classmethod
    def batch_mul(cls, points, scalars, msg="batch_mul"):
        """Σ scalarsᵢ · pointsᵢ 를 계산하고 ECC 연산 큐에 기록한다."""
        builder = next(p.builder for p in points)
        value = ec_batch_mul([p.get_value() for p in points],
                             [scalar_value(s) for s in scalars])
        result = cls(builder, value)
        builder.queue_ecc_op(EccOp("msm", points, scalars, result, msg))
        return result

    def __add__(self, other):
        return GroupVar.batch_mul([self, other], [1, 1], msg="group add")

    def __sub__(self, other):
        return GroupVar.batch_mul([self, other], [1, -1], msg="group sub")

    def __neg__(self):
        return GroupVar.batch_mul([self], [-1], msg="group neg")

    def __mul__(self, scalar):
        return GroupVar.batch_mul([self], [scalar], msg="group mul")

    def assert_equal(self, other, msg="group assert_equal"):
        self.builder.queue_ecc_op(EccOp("eq", [self, other], msg=msg))

    def __repr__(self):
        if self.is_point_at_infinity:
            return "GroupVar(infinity)"
        return f"GroupVar({int(self.value[0])}, {int(self.value[1])})"
