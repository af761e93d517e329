"""
회로 빌더 (Circuit Builder)
============================

재귀(in-circuit) 검증기가 연산을 "제약(constraint)"으로 기록하는 곳.

**기록하는 제약의 종류**:
  1. 산술 게이트 (PLONK 스타일):
       q_m·a·b + q_l·a + q_r·b + q_o·c + q_c = 0
  2. 복사 제약: 두 변수가 같은 값이어야 함
  3. SHA-256 블랙박스 제약: 트랜스크립트 챌린지 변수가
       SHA256(흡수된 조각들) mod r 과 같아야 함
  4. ECC 연산 큐 (goblin 스타일):
       그룹 연산(MSM, 동등성)은 게이트로 풀지 않고 큐에 쌓아 두었다가
       check_circuit() 에서 native로 재생하여 확인한다

빌더는 "만족 여부"만 판단한다. 증명 생성(proving)은 하지 않는다.

**실패 기록**:
  제약을 추가하는 시점에 witness 값이 제약을 만족하지 않으면
  처음 실패한 제약의 메시지를 err 에 기록하고 failed 를 True로 만든다.
  check_circuit()은 모든 제약을 처음부터 다시 확인한다.

사용 예시:
    >>> builder = CircuitBuilder()
    >>> a = builder.add_variable(FR(3))
    >>> b = builder.add_variable(FR(4))
    >>> c = builder.add_variable(FR(12))
    >>> builder.create_arithmetic_gate(a, b, c, q_m=1, q_o=-1)
    >>> builder.check_circuit()
    True
"""

import hashlib
import logging

from zkp.honk.field import FR, CURVE_ORDER, ec_batch_mul

LOGGER = logging.getLogger(__name__)


class DigestRef:
    """SHA-256 제약의 출력 digest(256비트 전체)를 가리키는 조각.

    트랜스크립트 체이닝에서 이전 챌린지의 digest가 다음 해시 입력이 된다.
    """

    def __init__(self, index):
        self.index = index


class EccOp:
    """ECC 연산 큐의 한 항목.

    kind:
        "msm": result == Σ scalarsᵢ · pointsᵢ
        "eq":  points[0] == points[1]
    """

    def __init__(self, kind, points, scalars=(), result=None, msg=""):
        self.kind = kind
        self.points = list(points)
        self.scalars = list(scalars)
        self.result = result
        self.msg = msg


def scalar_value(scalar):
    if hasattr(scalar, "get_value"):
        return scalar.get_value()
    return FR(int(scalar) % CURVE_ORDER)


class CircuitBuilder:
    """산술 게이트, 복사 제약, SHA-256 제약, ECC 연산 큐를 모으는 빌더.

    속성:
        variables: witness 값 리스트 (FR)
        gates: (a, b, c, q_m, q_l, q_r, q_o, q_c) 튜플 리스트
        copy_constraints: (i, j, msg) 리스트
        sha256_constraints: (parts, output_index) 리스트
        ecc_op_queue: EccOp 리스트
        failed: 제약 위반이 기록되었는지
        err: 처음 기록된 위반 메시지
    """

    def __init__(self):
        self.variables = []
        self.gates = []
        self.copy_constraints = []
        self.sha256_constraints = []
        self.ecc_op_queue = []
        self.failed = False
        self.err = None
        self.zero_index = self.add_variable(FR(0))

    # ─────────────────────────────────────────────────────────────────
    # 변수
    # ─────────────────────────────────────────────────────────────────

    def add_variable(self, value):
        """witness 변수를 추가하고 인덱스를 반환한다."""
        if not isinstance(value, FR):
            value = FR(int(value) % CURVE_ORDER)
        self.variables.append(value)
        return len(self.variables) - 1

    def get_variable(self, index):
        return self.variables[index]

    @property
    def num_gates(self):
        return len(self.gates)

    def failure(self, msg):
        """처음 발생한 제약 위반만 기록한다."""
        if not self.failed:
            self.failed = True
            self.err = msg
            LOGGER.debug("회로 제약 위반: %s", msg)

    # ─────────────────────────────────────────────────────────────────
    # 제약 추가
    # ─────────────────────────────────────────────────────────────────

    def _gate_holds(self, gate):
        a, b, c, q_m, q_l, q_r, q_o, q_c = gate
        va, vb, vc = self.variables[a], self.variables[b], self.variables[c]
        return q_m * va * vb + q_l * va + q_r * vb + q_o * vc + q_c == 0

    def create_arithmetic_gate(self, a, b, c, q_m=0, q_l=0, q_r=0, q_o=0, q_c=0,
                               msg="arithmetic gate"):
        """q_m·a·b + q_l·a + q_r·b + q_o·c + q_c = 0 게이트를 추가한다.

        Args:
            a, b, c: 변수 인덱스
            q_m, q_l, q_r, q_o, q_c: 셀렉터 (FR 또는 정수)
        """
        gate = (a, b, c, FR(int(q_m) % CURVE_ORDER), FR(int(q_l) % CURVE_ORDER),
                FR(int(q_r) % CURVE_ORDER), FR(int(q_o) % CURVE_ORDER),
                FR(int(q_c) % CURVE_ORDER))
        self.gates.append(gate)
        if not self._gate_holds(gate):
            self.failure(msg)

    def assert_equal(self, i, j, msg="assert_equal"):
        """변수 i 와 j 가 같아야 한다는 복사 제약을 추가한다."""
        self.copy_constraints.append((i, j, msg))
        if self.variables[i] != self.variables[j]:
            self.failure(msg)

    def add_sha256_constraint(self, parts, output_index):
        """variables[output_index] == SHA256(parts) mod r 제약을 추가한다.

        Args:
            parts: bytes, DigestRef, 또는 to_bytes()를 가진 변수(FieldVar/GroupVar)의 리스트
            output_index: 챌린지 변수 인덱스

        Returns:
            int: 이 제약의 인덱스 (이후 DigestRef 로 참조)
        """
        self.sha256_constraints.append((list(parts), output_index))
        return len(self.sha256_constraints) - 1

    def queue_ecc_op(self, op):
        """그룹 연산을 큐에 넣는다. 재생은 check_circuit()에서 한다."""
        self.ecc_op_queue.append(op)
        if not self._ecc_op_holds(op):
            self.failure(op.msg or op.kind)

    # ─────────────────────────────────────────────────────────────────
    # 확인
    # ─────────────────────────────────────────────────────────────────

    def _ecc_op_holds(self, op):
        values = [p.get_value() for p in op.points]
        if op.kind == "eq":
            return values[0] == values[1]
        expected = ec_batch_mul(values, [scalar_value(s) for s in op.scalars])
        return expected == op.result.get_value()

    def _serialize_parts(self, parts, digests):
        out = bytearray()
        for part in parts:
            if isinstance(part, (bytes, bytearray)):
                out.extend(part)
            elif isinstance(part, DigestRef):
                out.extend(digests[part.index])
            else:
                out.extend(part.to_bytes())
        return bytes(out)

    def check_circuit(self):
        """모든 제약을 다시 확인한다.

        Returns:
            bool: 모든 게이트, 복사 제약, SHA-256 제약, ECC 연산이 만족되면 True
        """
        for n, gate in enumerate(self.gates):
            if not self._gate_holds(gate):
                LOGGER.debug("게이트 %d 불만족", n)
                return False

        for i, j, msg in self.copy_constraints:
            if self.variables[i] != self.variables[j]:
                LOGGER.debug("복사 제약 불만족: %s", msg)
                return False

        digests = []
        for parts, output_index in self.sha256_constraints:
            digest = hashlib.sha256(self._serialize_parts(parts, digests)).digest()
            digests.append(digest)
            if self.variables[output_index] != FR(int.from_bytes(digest, "big") % CURVE_ORDER):
                LOGGER.debug("SHA-256 제약 불만족 (출력 변수 %d)", output_index)
                return False

        for op in self.ecc_op_queue:
            if not self._ecc_op_holds(op):
                LOGGER.debug("ECC 연산 불만족: %s", op.msg or op.kind)
                return False

        return True
