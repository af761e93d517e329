"""
회로 안의 필드 원소 (FieldVar)
===============================

재귀 검증기에서 스칼라는 FR 값이 아니라 회로 변수이다.
FieldVar는 두 가지 상태 중 하나이다.

  - 상수(constant): witness_index가 None, 값은 회로에 고정됨 (게이트 없음)
  - witness: 빌더의 변수를 가리킴, 연산마다 산술 게이트 하나를 추가

연산자(+, -, *, /, **)는 native FR과 같은 결과 값을 가지며,
witness가 관여하면 그 관계를 빌더의 게이트로 기록한다.

주의:
  py_ecc의 FR은 int/FR 이외의 피연산자에서 TypeError를 낸다.
  따라서 FR과 FieldVar를 섞을 때는 FieldVar가 왼쪽에 와야 한다.
  정수 상수는 양쪽 어디에 있어도 된다.

사용 예시:
    >>> builder = CircuitBuilder()
    >>> x = FieldVar.from_witness(builder, FR(3))
    >>> y = x * x + 1              # 게이트 2개
    >>> y.get_value()
    10
"""

from zkp.honk.field import FR, CURVE_ORDER
from zkp.honk.transcript import encode_scalar


class FieldVar:
    """회로 변수 또는 상수인 FR 원소.

    속성:
        builder: CircuitBuilder (상수는 None일 수 있음)
        witness_index: 빌더 변수 인덱스, 상수이면 None
        constant: 상수 값 (FR)
    """

    def __init__(self, builder=None, value=0, witness_index=None):
        self.builder = builder
        self.witness_index = witness_index
        if witness_index is None:
            self.constant = value if isinstance(value, FR) else FR(int(value) % CURVE_ORDER)
        else:
            self.constant = None

    @classmethod
    def from_witness(cls, builder, value):
        """새 witness 변수를 만든다."""
        return cls(builder, witness_index=builder.add_variable(value))

    def is_constant(self):
        return self.witness_index is None

    def get_value(self):
        if self.is_constant():
            return self.constant
        return self.builder.get_variable(self.witness_index)

    def one(self):
        return FieldVar(self.builder, FR(1))

    def zero(self):
        return FieldVar(self.builder, FR(0))

    def to_bytes(self):
        return encode_scalar(self.get_value())

    def __int__(self):
        return int(self.get_value())

    def __repr__(self):
        kind = "const" if self.is_constant() else f"w{self.witness_index}"
        return f"FieldVar({kind}={int(self.get_value())})"

    # ─────────────────────────────────────────────────────────────────
    # 내부 도우미
    # ─────────────────────────────────────────────────────────────────

    def _coerce(self, other):
        if isinstance(other, FieldVar):
            return other
        if isinstance(other, (int, FR)):
            return FieldVar(self.builder, other)
        raise TypeError(f"FieldVar와 {type(other).__name__}는 연산할 수 없습니다")

    def _context(self, other):
        return self.builder if not self.is_constant() else other.builder

    def _linear(self, other, ka, kb):
        """ka·self + kb·other 를 게이트 하나로 계산한다."""
        other = self._coerce(other)
        value = self.get_value() * ka + other.get_value() * kb
        if self.is_constant() and other.is_constant():
            return FieldVar(self.builder or other.builder, value)

        builder = self._context(other)
        result = FieldVar.from_witness(builder, value)
        q_l = 0 if self.is_constant() else ka
        q_r = 0 if other.is_constant() else kb
        q_c = FR(0)
        if self.is_constant():
            q_c = q_c + self.constant * ka
        if other.is_constant():
            q_c = q_c + other.constant * kb
        a = self.witness_index if not self.is_constant() else builder.zero_index
        b = other.witness_index if not other.is_constant() else builder.zero_index
        builder.create_arithmetic_gate(a, b, result.witness_index,
                                       q_l=q_l, q_r=q_r, q_o=-1, q_c=q_c,
                                       msg="field_t linear")
        return result

    # ─────────────────────────────────────────────────────────────────
    # 산술 연산
    # ─────────────────────────────────────────────────────────────────

    def __add__(self, other):
        return self._linear(other, 1, 1)

    def __radd__(self, other):
        return self._coerce(other)._linear(self, 1, 1)

    def __sub__(self, other):
        return self._linear(other, 1, -1)

    def __rsub__(self, other):
        return self._coerce(other)._linear(self, 1, -1)

    def __neg__(self):
        if self.is_constant():
            return FieldVar(self.builder, FR(0) - self.constant)
        return self._linear(0, -1, 0)

    def __mul__(self, other):
        other = self._coerce(other)
        if self.is_constant():
            if other.is_constant():
                return FieldVar(self.builder or other.builder, self.constant * other.constant)
            return other._linear(0, self.constant, 0)
        if other.is_constant():
            return self._linear(0, other.constant, 0)

        result = FieldVar.from_witness(self.builder, self.get_value() * other.get_value())
        self.builder.create_arithmetic_gate(self.witness_index, other.witness_index,
                                            result.witness_index, q_m=1, q_o=-1,
                                            msg="field_t mul")
        return result

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        """self / other. other의 값이 0이면 빌더에 위반을 기록한다."""
        other = self._coerce(other)
        if other.is_constant():
            if other.constant == 0:
                raise ZeroDivisionError("상수 0으로 나눌 수 없습니다")
            return self * (FR(1) / other.constant)

        builder = other.builder
        denominator = other.get_value()
        if denominator == 0:
            builder.failure("field_t division by zero")
            quotient = FR(0)
        else:
            quotient = self.get_value() / denominator
        result = FieldVar.from_witness(builder, quotient)
        # result · other - self = 0
        if self.is_constant():
            builder.create_arithmetic_gate(result.witness_index, other.witness_index,
                                           builder.zero_index, q_m=1,
                                           q_c=FR(0) - self.constant,
                                           msg="field_t div")
        else:
            builder.create_arithmetic_gate(result.witness_index, other.witness_index,
                                           self.witness_index, q_m=1, q_o=-1,
                                           msg="field_t div")
        return result

    def __rtruediv__(self, other):
        return self._coerce(other).__truediv__(self)

    def __pow__(self, exponent):
        """정수 지수 거듭제곱 (square-and-multiply)."""
        if not isinstance(exponent, int) or exponent < 0:
            raise ValueError("지수는 0 이상의 정수여야 합니다")
        result = self.one()
        base = self
        while exponent:
            if exponent & 1:
                result = result * base
            exponent >>= 1
            if exponent:
                base = base * base
        return result

    # ─────────────────────────────────────────────────────────────────
    # 제약
    # ─────────────────────────────────────────────────────────────────

    def assert_equal(self, other, msg="field_t assert_equal"):
        """self == other 를 제약으로 추가한다."""
        other = self._coerce(other)
        if self.is_constant() and other.is_constant():
            if self.constant != other.constant:
                builder = self.builder or other.builder
                if builder is None:
                    raise ValueError(msg)
                builder.failure(msg)
            return
        if self.is_constant() or other.is_constant():
            var, const = (other, self) if self.is_constant() else (self, other)
            # var - const = 0
            var.builder.create_arithmetic_gate(var.witness_index, var.builder.zero_index,
                                               var.builder.zero_index, q_l=1,
                                               q_c=FR(0) - const.constant, msg=msg)
            return
        self.builder.assert_equal(self.witness_index, other.witness_index, msg)
