"""
Honk 관계식(Relations)
=======================

sumcheck의 마지막 단계에서 검증기는 "주장된 평가값"들로 각 관계식을 계산하고,
그 배치 합이 sumcheck의 최종 목표값과 같은지 확인한다.

  목표값 == pow(u) · Σ_{독립} cⱼ·Rⱼ(값들) + Σ_{종속} cⱼ·Rⱼ(값들)

**값(values)**:
  엔티티 이름 → 평가값 dict. 시프트된 엔티티는 "<name>_shift".
  값은 FR(native) 또는 FieldVar(recursive)이다.
  FR과 FieldVar를 섞지 않으며, 상수는 정수로만 쓴다.

**선형 종속(linearly dependent) 부분관계식**:
  초입방체 전체의 "합"이 0이어야 하는 관계식 (log-derivative 룩업의 두 번째 식).
  각 점에서 0일 필요가 없으므로 pow 다항식을 곱하지 않는다.

**관계식 목록**:
  Ultra:  ArithmeticRelation, PermutationRelation, LookupRelation
  Mega:   + EccOpQueueRelation, DatabusLookupRelation (calldata, return_data)
  ECCVM:  ECCVMTranscriptRelation, ECCVMSetRelation, ECCVMLookupRelation

각 관계식의 SUBRELATION_DEGREES 는 모든 엔티티를 1차로 볼 때의 차수이다.
"""


# ─────────────────────────────────────────────────────────────────────
# Ultra
# ─────────────────────────────────────────────────────────────────────

class ArithmeticRelation:
    """표준 PLONK 게이트:

        q_arith · (q_m·w_l·w_r + q_l·w_l + q_r·w_r + q_o·w_o + q_4·w_4 + q_c) = 0
    """

    SUBRELATION_DEGREES = (4,)
    SUBRELATION_LINEARLY_INDEPENDENT = (True,)

    @staticmethod
    def accumulate(values, params):
        v = values
        gate = (v["q_m"] * v["w_l"] * v["w_r"] + v["q_l"] * v["w_l"]
                + v["q_r"] * v["w_r"] + v["q_o"] * v["w_o"]
                + v["q_4"] * v["w_4"] + v["q_c"])
        return [v["q_arith"] * gate]


class PermutationRelation:
    """복사 제약의 grand product.

        (z_perm + L_first) · Πₖ (wₖ + β·idₖ + γ)
          − (z_perm_shift + L_last·δ_pub) · Πₖ (wₖ + β·σₖ + γ) = 0
        L_last · z_perm_shift = 0
    """

    SUBRELATION_DEGREES = (5, 2)
    SUBRELATION_LINEARLY_INDEPENDENT = (True, True)

    WIRES = ("w_l", "w_r", "w_o", "w_4")
    IDS = ("id_1", "id_2", "id_3", "id_4")
    SIGMAS = ("sigma_1", "sigma_2", "sigma_3", "sigma_4")

    @classmethod
    def compute_grand_product_numerator(cls, values, params):
        result = None
        for wire, ident in zip(cls.WIRES, cls.IDS):
            term = values[wire] + params.beta * values[ident] + params.gamma
            result = term if result is None else result * term
        return result

    @classmethod
    def compute_grand_product_denominator(cls, values, params):
        result = None
        for wire, sigma in zip(cls.WIRES, cls.SIGMAS):
            term = values[wire] + params.beta * values[sigma] + params.gamma
            result = term if result is None else result * term
        return result

    @classmethod
    def accumulate(cls, values, params):
        v = values
        numerator = cls.compute_grand_product_numerator(v, params)
        denominator = cls.compute_grand_product_denominator(v, params)
        grand_product = ((v["z_perm"] + v["lagrange_first"]) * numerator
                         - (v["z_perm_shift"] + v["lagrange_last"] * params.public_input_delta)
                         * denominator)
        boundary = v["lagrange_last"] * v["z_perm_shift"]
        return [grand_product, boundary]


class LookupRelation:
    """plookup grand product.

        wire_accum  = (w_l + q_r·w_l_shift) + η·(w_r + q_m·w_r_shift)
                      + η₂·(w_o + q_c·w_o_shift) + η₃·q_o
        table_accum = t₁ + η·t₂ + η₂·t₃ + η₃·t₄

        numerator   = (1+β) · (q_lookup·wire_accum + γ)
                      · (table_accum + β·table_accum_shift + γ(1+β))
        denominator = sorted_accum + β·sorted_accum_shift + γ(1+β)

        (z_lookup + L_first)·numerator − (z_lookup_shift + L_last·δ_lookup)·denominator = 0
        L_last · z_lookup_shift = 0
    """

    SUBRELATION_DEGREES = (5, 2)
    SUBRELATION_LINEARLY_INDEPENDENT = (True, True)

    @staticmethod
    def _table_accum(values, params, suffix=""):
        v = values
        return (v["table_1" + suffix] + params.eta * v["table_2" + suffix]
                + params.eta_two * v["table_3" + suffix]
                + params.eta_three * v["table_4" + suffix])

    @classmethod
    def compute_grand_product_numerator(cls, values, params):
        v = values
        one_plus_beta = 1 + params.beta
        gamma_by_one_plus_beta = params.gamma * one_plus_beta

        wire_accum = ((v["w_l"] + v["q_r"] * v["w_l_shift"])
                      + params.eta * (v["w_r"] + v["q_m"] * v["w_r_shift"])
                      + params.eta_two * (v["w_o"] + v["q_c"] * v["w_o_shift"])
                      + params.eta_three * v["q_o"])
        table_accum = cls._table_accum(v, params)
        table_accum_shift = cls._table_accum(v, params, "_shift")

        return (one_plus_beta * (v["q_lookup"] * wire_accum + params.gamma)
                * (table_accum + params.beta * table_accum_shift + gamma_by_one_plus_beta))

    @staticmethod
    def compute_grand_product_denominator(values, params):
        v = values
        gamma_by_one_plus_beta = params.gamma * (1 + params.beta)
        return v["sorted_accum"] + params.beta * v["sorted_accum_shift"] + gamma_by_one_plus_beta

    @classmethod
    def accumulate(cls, values, params):
        v = values
        numerator = cls.compute_grand_product_numerator(v, params)
        denominator = cls.compute_grand_product_denominator(v, params)
        grand_product = ((v["z_lookup"] + v["lagrange_first"]) * numerator
                         - (v["z_lookup_shift"]
                            + v["lagrange_last"] * params.lookup_grand_product_delta)
                         * denominator)
        boundary = v["lagrange_last"] * v["z_lookup_shift"]
        return [grand_product, boundary]


# ─────────────────────────────────────────────────────────────────────
# Mega: ECC 연산 큐, data bus
# ─────────────────────────────────────────────────────────────────────

class EccOpQueueRelation:
    """ECC 연산 큐 wire (ecc_op_wire_1..4)가 ecc op 블록의 다음 행 wire를 복사하는지.

    lagrange_ecc_op 이 1인 행 (ecc op 블록):
        L_op · (ecc_op_wire_k − w_k_shift) = 0        (k = 1..4)
    그 밖의 행:
        (1 − L_op) · ecc_op_wire_k = 0
    """

    WIRES = ("w_l", "w_r", "w_o", "w_4")
    OP_WIRES = ("ecc_op_wire_1", "ecc_op_wire_2", "ecc_op_wire_3", "ecc_op_wire_4")
    SUBRELATION_DEGREES = (2,) * 8
    SUBRELATION_LINEARLY_INDEPENDENT = (True,) * 8

    @classmethod
    def accumulate(cls, values, params):
        v = values
        lagrange_ecc_op = v["lagrange_ecc_op"]
        complement_ecc_op = 1 - lagrange_ecc_op
        copies = [lagrange_ecc_op * (v[op] - v[wire + "_shift"])
                  for op, wire in zip(cls.OP_WIRES, cls.WIRES)]
        outside = [complement_ecc_op * v[op] for op in cls.OP_WIRES]
        return copies + outside


class DatabusLookupRelation:
    """data bus 열(calldata, return_data)에 대한 log-derivative 룩업.

    각 bus 열마다 (bus 열 이름, 열 선택 셀렉터):
        calldata    ← q_l
        return_data ← q_r

        is_read        = q_busread · 열 선택 셀렉터
        read_term      = w_l + β·w_r + γ              (읽은 값, 인덱스)
        write_term     = bus + β·databus_id + γ       (bus 값, 인덱스)
        inverse_exists = is_read + read_counts − is_read·read_counts

        I·read_term·write_term − inverse_exists = 0                 (독립)
        is_read·I·write_term − read_counts·I·read_term 의 합 = 0    (종속)

    read_counts는 {0, 1}만 허용된다 (inverse_exists가 불리언 OR 이므로).
    """

    BUS_COLUMNS = (("calldata", "q_l"), ("return_data", "q_r"))
    SUBRELATION_DEGREES = (3, 4, 3, 4)
    SUBRELATION_LINEARLY_INDEPENDENT = (True, False, True, False)

    @classmethod
    def accumulate(cls, values, params):
        v = values
        result = []
        for bus, selector in cls.BUS_COLUMNS:
            inverses = v[bus + "_inverses"]
            read_counts = v[bus + "_read_counts"]
            is_read = v["q_busread"] * v[selector]
            read_term = v["w_l"] + params.beta * v["w_r"] + params.gamma
            write_term = v[bus] + params.beta * v["databus_id"] + params.gamma
            inverse_exists = is_read + read_counts - is_read * read_counts

            result.append(inverses * read_term * write_term - inverse_exists)
            result.append(is_read * inverses * write_term - read_counts * inverses * read_term)
        return result


# ─────────────────────────────────────────────────────────────────────
# ECCVM
# ─────────────────────────────────────────────────────────────────────

class ECCVMTranscriptRelation:
    """transcript 열의 누산기 점 덧셈 (아핀 좌표, 기울기 λ witness).

    op 행(transcript_op = 1)에서 acc_shift = acc + P:
        q·(λ·(Px − acc_x) − (Py − acc_y)) = 0
        q·(acc_x_shift + acc_x + Px − λ²) = 0
        q·(acc_y_shift + acc_y − λ·(acc_x − acc_x_shift)) = 0
    """

    SUBRELATION_DEGREES = (3, 3, 3)
    SUBRELATION_LINEARLY_INDEPENDENT = (True, True, True)

    @staticmethod
    def accumulate(values, params):
        v = values
        q = v["transcript_op"]
        lam = v["transcript_lambda"]
        acc_x, acc_y = v["transcript_accumulator_x"], v["transcript_accumulator_y"]
        acc_x_shift = v["transcript_accumulator_x_shift"]
        acc_y_shift = v["transcript_accumulator_y_shift"]
        px, py = v["transcript_Px"], v["transcript_Py"]

        slope = q * (lam * (px - acc_x) - (py - acc_y))
        x_add = q * (acc_x_shift + acc_x + px - lam * lam)
        y_add = q * (acc_y_shift + acc_y - lam * (acc_x - acc_x_shift))
        return [slope, x_add, y_add]


class ECCVMSetRelation:
    """transcript의 (pc, P)와 precompute 표의 (pc, round, P) 사이의 집합 순열.

        numerator   = t_op·(γ + pc + β·Px + β³·Py) + 1 − t_op
        denominator = p_sel·(γ + p_pc + β·p_Px + β²·p_round + β³·p_Py) + 1 − p_sel

        (z_perm + L_first)·numerator − (z_perm_shift + L_last·δ_eccvm)·denominator = 0
        L_last · z_perm_shift = 0

    precompute 표의 머리 행 4개 (pc 0, round 0..3, 점 0)는 분모에만 나타나며,
    그 곱의 역수가 δ_eccvm = 1 / (γ(γ+β²)(γ+2β²)(γ+3β²)) 이다.
    """

    SUBRELATION_DEGREES = (3, 2)
    SUBRELATION_LINEARLY_INDEPENDENT = (True, True)

    @staticmethod
    def compute_grand_product_numerator(values, params):
        v = values
        t_op = v["transcript_op"]
        tuple_term = (params.gamma + v["transcript_pc"] + params.beta * v["transcript_Px"]
                      + params.beta_cube * v["transcript_Py"])
        return t_op * tuple_term + 1 - t_op

    @staticmethod
    def compute_grand_product_denominator(values, params):
        v = values
        p_sel = v["precompute_select"]
        tuple_term = (params.gamma + v["precompute_pc"] + params.beta * v["precompute_Px"]
                      + params.beta_sqr * v["precompute_round"]
                      + params.beta_cube * v["precompute_Py"])
        return p_sel * tuple_term + 1 - p_sel

    @classmethod
    def accumulate(cls, values, params):
        v = values
        numerator = cls.compute_grand_product_numerator(v, params)
        denominator = cls.compute_grand_product_denominator(v, params)
        grand_product = ((v["z_perm"] + v["lagrange_first"]) * numerator
                         - (v["z_perm_shift"]
                            + v["lagrange_last"] * params.eccvm_set_permutation_delta)
                         * denominator)
        boundary = v["lagrange_last"] * v["z_perm_shift"]
        return [grand_product, boundary]


class ECCVMLookupRelation:
    """msm 행이 precompute 표에서 (pc, P)를 읽는 log-derivative 룩업.

        read_term      = msm_pc + γ + β·msm_Px + β²·msm_Py
        write_term     = precompute_pc + γ + β·precompute_Px + β²·precompute_Py
        inverse_exists = msm_select + precompute_select − msm_select·precompute_select

        I·read_term·write_term − inverse_exists = 0                          (독립)
        msm_select·I·write_term − lookup_read_counts·I·read_term 의 합 = 0  (종속)
    """

    SUBRELATION_DEGREES = (3, 3)
    SUBRELATION_LINEARLY_INDEPENDENT = (True, False)

    @staticmethod
    def accumulate(values, params):
        v = values
        inverses = v["lookup_inverses"]
        is_read = v["msm_select"]
        is_write = v["precompute_select"]
        read_term = (v["msm_pc"] + params.gamma + params.beta * v["msm_Px"]
                     + params.beta_sqr * v["msm_Py"])
        write_term = (v["precompute_pc"] + params.gamma + params.beta * v["precompute_Px"]
                      + params.beta_sqr * v["precompute_Py"])
        inverse_exists = is_read + is_write - is_read * is_write

        return [
            inverses * read_term * write_term - inverse_exists,
            is_read * inverses * write_term - v["lookup_read_counts"] * inverses * read_term,
        ]
