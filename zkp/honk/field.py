"""
Honk 기반 모듈: 유한체(Finite Field) 및 타원곡선 연산
=====================================================

Honk 검증기 전체에서 사용되는 기본 대수적 도구를 정의한다.

**유한체 FR**:
  bn128(BN254) 곡선의 스칼라 필드. 다중선형(multilinear) 다항식의 평가값,
  sumcheck 라운드 값, Fiat-Shamir 챌린지가 모두 이 필드의 원소이다.

**기저체 FQ**:
  G1 점의 좌표가 속한 필드. 증명 버퍼에서 커밋먼트를 읽을 때
  좌표 범위(< q)와 곡선 방정식 y² = x³ + 3 을 확인하는 데 사용된다.

**타원곡선 연산**:
  KZG 커밋먼트 검증과 ZeroMorph 배치(batch) 연산을 위한 G1, G2 연산 및 페어링.
  G1의 항등원(무한원점)은 py_ecc 관례대로 None 으로 표현한다.

사용 예시:
    >>> from zkp.honk.field import FR, G1, ec_mul, ec_batch_mul
    >>> P = ec_mul(G1, FR(5))
    >>> Q = ec_batch_mul([G1, P], [FR(2), FR(3)])   # 2·G1 + 3·P
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128

from zkp.honk.errors import DegenerateChallengeError


# ─────────────────────────────────────────────────────────────────────
# 유한체
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ를 상속하여 +, -, *, /, ** 연산을 제공한다.

    주의:
        py_ecc의 나눗셈은 0으로 나누면 조용히 0을 반환한다.
        역원이 반드시 존재해야 하는 곳에서는 divide_nonzero()를 사용한다.
    """
    field_modulus = bn128.curve_order


# 스칼라 필드 위수 r
CURVE_ORDER = bn128.curve_order

# 기저체 위수 q (G1 좌표의 범위)
FIELD_MODULUS = bn128.field_modulus


def divide_nonzero(numerator, denominator, what):
    """numerator / denominator. 분모가 0이면 역원이 없으므로 실패한다.

    값은 FR 또는 FieldVar 이다 (int() 로 witness 값을 본다).

    Raises:
        DegenerateChallengeError: 분모가 0일 때
    """
    if int(denominator) == 0:
        raise DegenerateChallengeError(f"{what}의 분모가 0입니다")
    return numerator / denominator


# ─────────────────────────────────────────────────────────────────────
# 타원곡선 상수 및 연산
# ─────────────────────────────────────────────────────────────────────

# G1 그룹 생성자 ([1]₁)
G1 = bn128.G1

# G2 그룹 생성자 ([1]₂)
G2 = bn128.G2

# G1 항등원
Z1 = None

# 증명 버퍼에서 항등원을 나타내는 좌표 인코딩
IDENTITY_ENCODING = (0, 0)


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point.

    Args:
        point: G1 또는 G2 위의 점 (None = 항등원)
        scalar: 정수 또는 FR 원소

    Returns:
        scalar · point
    """
    if isinstance(scalar, FR):
        scalar = int(scalar)
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2."""
    return bn128.add(p1, p2)


def ec_neg(point):
    """타원곡선 점의 역원: -point."""
    return bn128.neg(point)


def ec_batch_mul(points, scalars):
    """다중 스칼라 곱셈(MSM): Σᵢ scalarsᵢ · pointsᵢ.

    ZeroMorph 검증기의 커밋먼트 결합과 번역 일관성 배치에 사용된다.
    스칼라가 0인 항과 항등원 점은 건너뛴다.

    Args:
        points: G1 점 리스트
        scalars: FR 원소 리스트 (points와 같은 길이)

    Returns:
        G1 점 (항등원이면 None)

    Raises:
        ValueError: 길이가 다를 때
    """
    if len(points) != len(scalars):
        raise ValueError(
            f"점과 스칼라의 개수가 다릅니다: {len(points)} != {len(scalars)}"
        )
    result = Z1
    for point, scalar in zip(points, scalars):
        if point is None or scalar == 0:
            continue
        result = ec_add(result, ec_mul(point, scalar))
    return result


def ec_pairing(g2_point, g1_point):
    """쌍선형 페어링 e(G1, G2) → GT.

    주의:
        py_ecc.bn128.pairing의 인자 순서는 (G2, G1)이다.
    """
    return bn128.pairing(g2_point, g1_point)


def is_on_curve(point):
    """G1 점이 곡선 y² = x³ + 3 위에 있는지 확인한다 (None은 항등원으로 허용)."""
    return bn128.is_on_curve(point, bn128.b)


def point_from_affine(x, y):
    """정수 좌표 쌍을 py_ecc G1 점 (FQ, FQ)로 변환한다.

    곡선 소속 여부는 확인하지 않는다. 확인과 항등원 정규화는
    커밋먼트 수신 단계(commitments.receive_commitment)의 책임이다.
    """
    return (FQ(x), FQ(y))


def point_to_affine(point):
    """G1 점을 정수 좌표 쌍으로 변환한다. 항등원은 (0, 0)."""
    if point is None:
        return IDENTITY_ENCODING
    return (int(point[0]), int(point[1]))
