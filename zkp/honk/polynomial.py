"""
Honk 기반 모듈: 고정 크기 다항식
=================================

Honk에서 하나의 열(column) 다항식은 길이 N = 2^d 의 값 배열이다.
같은 배열을 두 가지로 해석한다.

**다중선형(multilinear) 해석**:
  배열의 i번째 값은 불리언 초입방체(hypercube) 점 (i₀, i₁, ..., i_{d-1})에서의
  평가값이다 (i₀가 최하위 비트). evaluate_mle(u)는 다중선형 확장을 u에서 평가한다.
  sumcheck가 이 해석을 사용한다.

**단변수(univariate) 해석**:
  같은 배열을 계수 [c₀, c₁, ..., c_{N-1}]로 보면 f(X) = Σ cᵢ·Xⁱ 이다.
  KZG 커밋먼트와 ZeroMorph가 이 해석을 사용한다.
  따라서 다중선형 다항식의 커밋먼트 = 단변수 다항식의 KZG 커밋먼트이다.

**shift**:
  g의 시프트 g_shift[i] = g[i+1]. 단변수로는 (g(X) - g[0]) / X 이며,
  Honk에서 시프트될 다항식은 항상 g[0] = 0 이다.

사용 예시:
    >>> p = Polynomial([FR(1), FR(2), FR(3), FR(4)])
    >>> p.evaluate_mle([FR(0), FR(1)])    # index 2
    FR(3)
    >>> p.evaluate(FR(2))                 # 1 + 4 + 12 + 32
    FR(49)
"""

from zkp.honk.field import FR


class Polynomial:
    """유한체 FR 위의 고정 크기 다항식.

    속성:
        coeffs: FR 원소 리스트 (길이 = size)
    """

    def __init__(self, coeffs=None, size=None):
        """다항식 생성.

        Args:
            coeffs: FR 원소(또는 정수) 리스트. None이면 영 다항식.
            size: 지정하면 뒤쪽을 0으로 채워 이 길이로 맞춘다.
        """
        coeffs = [c if isinstance(c, FR) else FR(c) for c in (coeffs or [])]
        if size is not None:
            if len(coeffs) > size:
                raise ValueError(f"계수 {len(coeffs)}개가 크기 {size}를 초과합니다")
            coeffs = coeffs + [FR(0)] * (size - len(coeffs))
        self.coeffs = coeffs

    @classmethod
    def zero(cls, size):
        return cls(size=size)

    @property
    def size(self):
        return len(self.coeffs)

    def is_zero(self):
        return all(c == 0 for c in self.coeffs)

    def evaluate(self, point):
        """단변수 평가 (Horner's method)."""
        if not isinstance(point, FR):
            point = FR(point)
        result = FR(0)
        for coeff in reversed(self.coeffs):
            result = result * point + coeff
        return result

    def evaluate_mle(self, point):
        """다중선형 확장의 평가.

        변수 u₀부터 차례로 접는다(fold): 각 단계에서
            f'[l] = f[2l] + u_k · (f[2l+1] - f[2l])

        Args:
            point: FR 원소 리스트 [u₀, ..., u_{d-1}], 길이 d = log₂(size)

        Raises:
            ValueError: 크기가 2^d 가 아닐 때
        """
        if len(self.coeffs) != 1 << len(point):
            raise ValueError(
                f"다항식 크기 {len(self.coeffs)}와 점의 차원 {len(point)}이 맞지 않습니다"
            )
        values = list(self.coeffs)
        for u in point:
            values = [
                values[2 * l] + u * (values[2 * l + 1] - values[2 * l])
                for l in range(len(values) // 2)
            ]
        return values[0]

    def shifted(self):
        """시프트 다항식 g_shift[i] = g[i+1] (마지막은 0).

        Raises:
            ValueError: g[0] != 0 일 때 (시프트가 X로의 나눗셈이 아니게 됨)
        """
        if self.coeffs and self.coeffs[0] != 0:
            raise ValueError("시프트할 다항식의 첫 계수는 0이어야 합니다")
        return Polynomial(self.coeffs[1:] + [FR(0)])

    def divide_by_linear(self, point):
        """(f(X) - f(z)) / (X - z) 의 몫을 합성 나눗셈(synthetic division)으로 구한다.

        Returns:
            Polynomial: 크기가 같은 몫 다항식 (최고차 계수 0)
        """
        if not isinstance(point, FR):
            point = FR(point)
        n = len(self.coeffs)
        quotient = [FR(0)] * n
        carry = FR(0)
        for i in range(n - 1, 0, -1):
            carry = carry * point + self.coeffs[i]
            quotient[i - 1] = carry
        return Polynomial(quotient)

    def __add__(self, other):
        """다항식 덧셈. 크기가 다르면 긴 쪽에 맞춘다."""
        n = max(len(self.coeffs), len(other.coeffs))
        a = self.coeffs + [FR(0)] * (n - len(self.coeffs))
        b = other.coeffs + [FR(0)] * (n - len(other.coeffs))
        return Polynomial([x + y for x, y in zip(a, b)])

    def __sub__(self, other):
        return self + (-other)

    def __neg__(self):
        return Polynomial([FR(0) - c for c in self.coeffs])

    def __mul__(self, scalar):
        """스칼라곱: scalar · p."""
        if isinstance(scalar, int):
            scalar = FR(scalar)
        return Polynomial([c * scalar for c in self.coeffs])

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    def __getitem__(self, index):
        return self.coeffs[index]

    def __setitem__(self, index, value):
        self.coeffs[index] = value if isinstance(value, FR) else FR(value)

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return False
        return self.coeffs == other.coeffs

    def __len__(self):
        return len(self.coeffs)

    def __repr__(self):
        return "Poly(" + ", ".join(str(int(c)) for c in self.coeffs) + ")"
