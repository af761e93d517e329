"""
테스트용 예제 회로 (실행 추적)
===============================

검증기 테스트에 필요한 정직한 실행 추적을 손으로 구성한다.
각 회로는 열 이름 → Polynomial dict 로 사전계산 열과 witness 열을 제공한다.
챌린지에 의존하는 열(sorted_accum, 역원, grand product)은 테스트 Prover가 계산한다.

  ultra_circuit():  x³ + x + 5 = 35 (x = 3), 공개 입력 35, 룩업 (3, 9) ∈ {(a, a²)}
  mega_circuit():   ultra + ecc op 블록 2행 + calldata 읽기 1회, return_data 는 비어 있음
  eccvm_circuit():  점 덧셈 2회, precompute 표, msm 읽기 3회
  trivial_circuit(): 크기 1의 빈 Ultra 회로 (sumcheck 라운드 0)
"""

from zkp.honk.field import FR
from zkp.honk.flavor import UltraFlavor, MegaFlavor, ECCVMFlavor
from zkp.honk.polynomial import Polynomial


class TestCircuit:
    """정직한 실행 추적.

    속성:
        flavor: Flavor 클래스
        circuit_size: N
        public_inputs: FR 리스트
        pub_inputs_offset: 공개 입력이 시작하는 행
        precomputed: 이름 → Polynomial
        witness: 이름 → Polynomial (챌린지와 무관한 열)
        lookup_entries: (table_row_value_tuple 리스트, 조회된 tuple 리스트) - Ultra만
        hack: 번역 단계의 보조 다항식 (ECCVM만)
    """

    __test__ = False

    def __init__(self, flavor, circuit_size, precomputed, witness, public_inputs=(),
                 pub_inputs_offset=0, sorted_rows=None, hack=None):
        self.flavor = flavor
        self.circuit_size = circuit_size
        self.precomputed = precomputed
        self.witness = witness
        self.public_inputs = [FR(x) for x in public_inputs]
        self.pub_inputs_offset = pub_inputs_offset
        self.sorted_rows = sorted_rows
        self.hack = hack

    def compute_sorted_accum(self, eta, eta_two, eta_three):
        """정렬된 룩업 리스트를 η로 배치한 열 s = s₁ + η·s₂ + η₂·s₃ + η₃·s₄."""
        values = [FR(0)] * self.circuit_size
        if self.sorted_rows is None:
            return Polynomial(values)
        start, entries = self.sorted_rows
        for i, (a, b, c, d) in enumerate(entries):
            values[start + i] = FR(a) + eta * b + eta_two * c + eta_three * d
        return Polynomial(values)


# ─────────────────────────────────────────────────────────────────────
# 도우미
# ─────────────────────────────────────────────────────────────────────

def _poly(values, size):
    return Polynomial([FR(v) for v in values], size=size)


def _lagrange(size):
    first = [1] + [0] * (size - 1)
    last = [0] * (size - 1) + [1]
    return _poly(first, size), _poly(last, size)


def _permutation(size, cycles, public_input_rows=()):
    """복사 제약 사이클로부터 id_k, σ_k (k = 1..4) 를 만든다.

    위치 (열 k, 행 j)의 id 값은 j + k·N (k = 0..3).
    공개 입력 행의 w_r 위치는 σ = −(j + 1) 로 사이클 밖에 둔다.
    """
    ids = [[j + k * size for j in range(size)] for k in range(4)]
    sigmas = [[FR(j + k * size) for j in range(size)] for k in range(4)]
    for cycle in cycles:
        for n, (col, row) in enumerate(cycle):
            next_col, next_row = cycle[(n + 1) % len(cycle)]
            sigmas[col][row] = FR(next_row + next_col * size)
    for row in public_input_rows:
        sigmas[1][row] = FR(-(row + 1))

    result = {}
    for k in range(4):
        result[f"id_{k + 1}"] = _poly(ids[k], size)
        result[f"sigma_{k + 1}"] = Polynomial(sigmas[k])
    return result


W_L, W_R, W_O = 0, 1, 2


# ─────────────────────────────────────────────────────────────────────
# Ultra / Mega
# ─────────────────────────────────────────────────────────────────────

def _ultra_trace(size=8):
    """x³ + x + 5 = 35 실행 추적 (행 배치).

    행 0: 전부 0 (시프트될 열의 첫 값은 0이어야 함)
    행 1: 공개 입력 35 (w_l, w_r)
    행 2: x·x = 9
    행 3: 9·x = 27
    행 4: 27 + x = 30
    행 5: 30 + 5 = 35
    행 6: 룩업 (3, 9, 0) 표 인덱스 1
    행 7: 비어 있음 (Mega에서는 bus 읽기)
    표 (행 4..7): (a, a², 0, 1), a = 1..4
    """
    w_l = [0, 35, 3, 9, 27, 30, 3, 0]
    w_r = [0, 35, 3, 3, 3, 0, 9, 0]
    w_o = [0, 0, 9, 27, 30, 35, 0, 0]

    selectors = {
        "q_m": [0, 0, 1, 1, 0, 0, 0, 0],
        "q_c": [0, 0, 0, 0, 0, 5, 0, 0],
        "q_l": [0, 0, 0, 0, 1, 1, 0, 0],
        "q_r": [0, 0, 0, 0, 1, 0, 0, 0],
        "q_o": [0, 0, -1, -1, -1, -1, 1, 0],
        "q_4": [0] * 8,
        "q_arith": [0, 0, 1, 1, 1, 1, 0, 0],
        "q_lookup": [0, 0, 0, 0, 0, 0, 1, 0],
    }
    tables = {
        "table_1": [0, 0, 0, 0, 1, 2, 3, 4],
        "table_2": [0, 0, 0, 0, 1, 4, 9, 16],
        "table_3": [0] * 8,
        "table_4": [0, 0, 0, 0, 1, 1, 1, 1],
    }
    cycles = [
        [(W_O, 2), (W_L, 3), (W_R, 6)],                          # x² = 9
        [(W_O, 3), (W_L, 4)],                                    # x³ = 27
        [(W_O, 4), (W_L, 5)],                                    # x³ + x = 30
        [(W_O, 5), (W_L, 1)],                                    # 출력 = 공개 입력
        [(W_L, 2), (W_R, 2), (W_R, 3), (W_R, 4), (W_L, 6)],      # x = 3
    ]
    # 정렬된 리스트: 표 ∪ {조회값 (3, 9, 0, 1)} , 행 3..7
    sorted_rows = (3, [(1, 1, 0, 1), (2, 4, 0, 1), (3, 9, 0, 1), (3, 9, 0, 1), (4, 16, 0, 1)])
    return w_l, w_r, w_o, selectors, tables, cycles, sorted_rows


def _ultra_columns(w_l, w_r, w_o, selectors, tables, cycles, size, public_input_rows):
    precomputed = {name: _poly(values, size) for name, values in selectors.items()}
    precomputed.update({name: _poly(values, size) for name, values in tables.items()})
    precomputed.update(_permutation(size, cycles, public_input_rows))
    precomputed["lagrange_first"], precomputed["lagrange_last"] = _lagrange(size)
    witness = {
        "w_l": _poly(w_l, size),
        "w_r": _poly(w_r, size),
        "w_o": _poly(w_o, size),
        "w_4": Polynomial.zero(size),
    }
    return precomputed, witness


def ultra_circuit():
    size = 8
    w_l, w_r, w_o, selectors, tables, cycles, sorted_rows = _ultra_trace(size)
    precomputed, witness = _ultra_columns(w_l, w_r, w_o, selectors, tables, cycles,
                                          size, public_input_rows=[1])
    return TestCircuit(UltraFlavor, size, precomputed, witness,
                       public_inputs=[35], pub_inputs_offset=1, sorted_rows=sorted_rows)


def mega_circuit():
    """Ultra 추적 + 행 0, 1의 ecc op 블록 + 행 7의 calldata 읽기.

    calldata = [0, 7, 0, ...], databus_id[i] = i
    행 7: q_busread = 1, q_l = 1 (calldata 선택), w_l = 7 (값), w_r = 1 (인덱스)
    return_data 와 그 read_counts 는 모두 0 → 커밋먼트는 항등원
    ecc op 블록 (행 0, 1): ecc_op_wire_k[i] = w_k[i + 1], ecc_op_wire_4 는 0 → 항등원
    """
    size = 8
    w_l, w_r, w_o, selectors, tables, cycles, sorted_rows = _ultra_trace(size)
    w_l[7], w_r[7] = 7, 1
    selectors["q_l"][7] = 1
    precomputed, witness = _ultra_columns(w_l, w_r, w_o, selectors, tables, cycles,
                                          size, public_input_rows=[1])
    precomputed["q_busread"] = _poly([0, 0, 0, 0, 0, 0, 0, 1], size)
    precomputed["databus_id"] = _poly(list(range(size)), size)
    witness["calldata"] = _poly([0, 7, 0, 0, 0, 0, 0, 0], size)
    witness["calldata_read_counts"] = _poly([0, 1, 0, 0, 0, 0, 0, 0], size)
    witness["return_data"] = Polynomial.zero(size)
    witness["return_data_read_counts"] = Polynomial.zero(size)

    ecc_op_rows = (0, 1)
    precomputed["lagrange_ecc_op"] = _poly([1 if i in ecc_op_rows else 0 for i in range(size)],
                                           size)
    for op_wire, wire in zip(MegaFlavor.ECC_OP_WIRES, ("w_l", "w_r", "w_o", "w_4")):
        values = [witness[wire][i + 1] if i in ecc_op_rows else FR(0) for i in range(size)]
        witness[op_wire] = Polynomial(values)
    return TestCircuit(MegaFlavor, size, precomputed, witness,
                       public_inputs=[35], pub_inputs_offset=1, sorted_rows=sorted_rows)


def trivial_circuit():
    """크기 1의 Ultra 회로: 모든 열이 0, lagrange_first = lagrange_last = 1."""
    size = 1
    precomputed = {name: Polynomial.zero(size) for name in UltraFlavor.PRECOMPUTED}
    precomputed.update(_permutation(size, []))
    precomputed["lagrange_first"], precomputed["lagrange_last"] = _lagrange(size)
    witness = {name: Polynomial.zero(size) for name in ("w_l", "w_r", "w_o", "w_4")}
    return TestCircuit(UltraFlavor, size, precomputed, witness)


# ─────────────────────────────────────────────────────────────────────
# ECCVM
# ─────────────────────────────────────────────────────────────────────

def _add_points(acc, point):
    """아핀 덧셈 공식 (기울기 λ)을 FR 위에서 그대로 계산한다."""
    acc_x, acc_y = acc
    px, py = point
    lam = (py - acc_y) / (px - acc_x)
    x3 = lam * lam - acc_x - px
    y3 = lam * (acc_x - x3) - acc_y
    return lam, (x3, y3)


def eccvm_circuit():
    """점 덧셈 두 번의 ECCVM 추적.

    transcript (행 1, 2): 누산기 A₀ = (5, 6) 에 P₁ = (11, 12), P₂ = (21, 22) 를 더함
    precompute (행 1..4): 머리 행 pc 0, round 0..3, 점 0
               (행 5, 6): P₁ (pc 2), P₂ (pc 1), round 0
    msm (행 1..3): P₁, P₁, P₂ 읽기 → read_counts 행 5 = 2, 행 6 = 1
    """
    size = 8
    acc0 = (FR(5), FR(6))
    p1, p2 = (FR(11), FR(12)), (FR(21), FR(22))
    lam1, acc1 = _add_points(acc0, p1)
    lam2, acc2 = _add_points(acc1, p2)

    columns = {
        "transcript_op": [0, 1, 1, 0, 0, 0, 0, 0],
        "transcript_pc": [0, 2, 1, 0, 0, 0, 0, 0],
        "transcript_Px": [0, p1[0], p2[0], 0, 0, 0, 0, 0],
        "transcript_Py": [0, p1[1], p2[1], 0, 0, 0, 0, 0],
        "transcript_z1": [0, 3, 5, 0, 0, 0, 0, 0],
        "transcript_z2": [0, 4, 6, 0, 0, 0, 0, 0],
        "transcript_accumulator_x": [0, acc0[0], acc1[0], acc2[0], 0, 0, 0, 0],
        "transcript_accumulator_y": [0, acc0[1], acc1[1], acc2[1], 0, 0, 0, 0],
        "transcript_lambda": [0, lam1, lam2, 0, 0, 0, 0, 0],
        "precompute_select": [0, 1, 1, 1, 1, 1, 1, 0],
        "precompute_pc": [0, 0, 0, 0, 0, 2, 1, 0],
        "precompute_round": [0, 0, 1, 2, 3, 0, 0, 0],
        "precompute_Px": [0, 0, 0, 0, 0, p1[0], p2[0], 0],
        "precompute_Py": [0, 0, 0, 0, 0, p1[1], p2[1], 0],
        "msm_select": [0, 1, 1, 1, 0, 0, 0, 0],
        "msm_pc": [0, 2, 2, 1, 0, 0, 0, 0],
        "msm_Px": [0, p1[0], p1[0], p2[0], 0, 0, 0, 0],
        "msm_Py": [0, p1[1], p1[1], p2[1], 0, 0, 0, 0],
        "lookup_read_counts": [0, 0, 0, 0, 0, 2, 1, 0],
    }
    assert set(columns) == set(ECCVMFlavor.WIRES)
    witness = {name: Polynomial([FR(int(v)) for v in values]) for name, values in columns.items()}

    precomputed = {}
    precomputed["lagrange_first"], precomputed["lagrange_last"] = _lagrange(size)
    hack = _poly([1, 2, 3, 4, 5, 6, 7, 8], size)
    return TestCircuit(ECCVMFlavor, size, precomputed, witness, hack=hack)
