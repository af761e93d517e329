"""
Honk Flavor: 증명 시스템 변형의 정적 기술
==========================================

Flavor는 하나의 증명 시스템 변형이 가진 "모양"을 이름으로 적어 둔 정적 클래스이다.

  - 어떤 열(엔티티)이 있는가: 사전계산(precomputed) / witness / 시프트 대상
  - 관계식 목록과 배치된 sumcheck 단변수 다항식의 길이
  - 커밋먼트를 받는 순서 (프로토콜 단계별 묶음)
  - 변형 플래그: HAS_DATABUS (Mega), IS_ECCVM

검증기는 생성 시점에 Flavor를 한 번 고르고, 이후 분기는 플래그로만 한다.

**엔티티 이름 규칙**:
  소문자 이름(w_l, z_perm, ...)은 평가값/커밋먼트의 키이다.
  트랜스크립트 레이블은 대문자(W_L, Z_PERM, ...)이다.
  시프트된 엔티티의 평가값 키는 "<name>_shift" 이다.

**Ultra 열 구성** (N = 회로 크기):
  precomputed: 셀렉터 q_*, 순열 σ/id, 룩업 표 table_1..4, lagrange_first/last
  witness:     w_l, w_r, w_o, w_4, sorted_accum, z_perm, z_lookup
  시프트 대상: table_1..4, w_l, w_r, w_o, w_4, sorted_accum, z_perm, z_lookup

**Mega 추가 열**:
  precomputed: q_busread, databus_id, lagrange_ecc_op
  witness:     ecc_op_wire_1..4, calldata, return_data 와 각 read_counts, inverses
"""

from zkp.honk.relations import (
    ArithmeticRelation,
    PermutationRelation,
    LookupRelation,
    EccOpQueueRelation,
    DatabusLookupRelation,
    ECCVMTranscriptRelation,
    ECCVMSetRelation,
    ECCVMLookupRelation,
)


def label_for(name):
    """엔티티 이름 → 트랜스크립트 레이블 (W_L, Z_PERM, ...)."""
    return name.upper()


def shift_key(name):
    return name + "_shift"


class Flavor:
    """모든 Flavor의 공통 도우미."""

    NAME = None
    HAS_DATABUS = False
    IS_ECCVM = False
    HAS_PUBLIC_INPUTS = True

    PRECOMPUTED = ()
    WITNESS = ()
    TO_BE_SHIFTED = ()
    RELATIONS = ()

    @classmethod
    def unshifted(cls):
        """unshifted 엔티티: precomputed 다음 witness (평가값 순서와 같음)."""
        return cls.PRECOMPUTED + cls.WITNESS

    @classmethod
    def shifted(cls):
        return tuple(shift_key(name) for name in cls.TO_BE_SHIFTED)

    @classmethod
    def all_entities(cls):
        return cls.unshifted() + cls.shifted()

    @classmethod
    def num_all_entities(cls):
        return len(cls.PRECOMPUTED) + len(cls.WITNESS) + len(cls.TO_BE_SHIFTED)

    @classmethod
    def subrelation_degrees(cls):
        return tuple(d for relation in cls.RELATIONS for d in relation.SUBRELATION_DEGREES)

    @classmethod
    def subrelation_linearly_independent(cls):
        return tuple(flag for relation in cls.RELATIONS
                     for flag in relation.SUBRELATION_LINEARLY_INDEPENDENT)

    @classmethod
    def num_subrelations(cls):
        return len(cls.subrelation_degrees())

    @classmethod
    def batched_relation_partial_length(cls):
        """sumcheck 라운드 단변수 다항식의 평가 개수 L.

        관계식 최대 차수 + pow 인자(1) + 1.
        """
        return max(cls.subrelation_degrees()) + 2


# ─────────────────────────────────────────────────────────────────────
# Ultra
# ─────────────────────────────────────────────────────────────────────

class UltraFlavor(Flavor):
    """표준 산술 + 복사 제약 + plookup."""

    NAME = "ultra"

    PRECOMPUTED = (
        "q_m", "q_c", "q_l", "q_r", "q_o", "q_4", "q_arith", "q_lookup",
        "sigma_1", "sigma_2", "sigma_3", "sigma_4",
        "id_1", "id_2", "id_3", "id_4",
        "table_1", "table_2", "table_3", "table_4",
        "lagrange_first", "lagrange_last",
    )
    WITNESS = ("w_l", "w_r", "w_o", "w_4", "sorted_accum", "z_perm", "z_lookup")
    TO_BE_SHIFTED = (
        "table_1", "table_2", "table_3", "table_4",
        "w_l", "w_r", "w_o", "w_4", "sorted_accum", "z_perm", "z_lookup",
    )
    RELATIONS = (ArithmeticRelation, PermutationRelation, LookupRelation)

    # 커밋먼트 수신 묶음 (프로토콜 순서)
    WIRE_COMMITMENTS = ("w_l", "w_r", "w_o")
    SORTED_ACCUM_COMMITMENTS = ("sorted_accum", "w_4")
    LOG_DERIVATIVE_INVERSE_COMMITMENTS = ()
    GRAND_PRODUCT_COMMITMENTS = ("z_perm", "z_lookup")


class MegaFlavor(UltraFlavor):
    """Ultra + ECC 연산 큐 wire + data bus (calldata, return_data) log-derivative 룩업.

    ecc_op_wire_1..4 는 W_O 와 CALLDATA 사이에서 받는다.
    """

    NAME = "mega"
    HAS_DATABUS = True

    ECC_OP_WIRES = ("ecc_op_wire_1", "ecc_op_wire_2", "ecc_op_wire_3", "ecc_op_wire_4")

    PRECOMPUTED = UltraFlavor.PRECOMPUTED + ("q_busread", "databus_id", "lagrange_ecc_op")
    WITNESS = UltraFlavor.WITNESS + ECC_OP_WIRES + (
        "calldata", "calldata_read_counts", "calldata_inverses",
        "return_data", "return_data_read_counts", "return_data_inverses",
    )
    RELATIONS = UltraFlavor.RELATIONS + (EccOpQueueRelation, DatabusLookupRelation)

    WIRE_COMMITMENTS = UltraFlavor.WIRE_COMMITMENTS + ECC_OP_WIRES + (
        "calldata", "calldata_read_counts", "return_data", "return_data_read_counts",
    )
    LOG_DERIVATIVE_INVERSE_COMMITMENTS = ("calldata_inverses", "return_data_inverses")


# ─────────────────────────────────────────────────────────────────────
# ECCVM
# ─────────────────────────────────────────────────────────────────────

class ECCVMFlavor(Flavor):
    """ECC 연산 실행 추적(transcript / precompute / msm 열)을 검증하는 변형.

    공개 입력이 없고, 검증 후 번역 일관성(translation) 단계가 이어진다.
    """

    NAME = "eccvm"
    IS_ECCVM = True
    HAS_PUBLIC_INPUTS = False

    PRECOMPUTED = ("lagrange_first", "lagrange_last")
    WIRES = (
        "transcript_op", "transcript_pc", "transcript_Px", "transcript_Py",
        "transcript_z1", "transcript_z2",
        "transcript_accumulator_x", "transcript_accumulator_y", "transcript_lambda",
        "precompute_select", "precompute_pc", "precompute_round",
        "precompute_Px", "precompute_Py",
        "msm_select", "msm_pc", "msm_Px", "msm_Py",
        "lookup_read_counts",
    )
    WITNESS = WIRES + ("lookup_inverses", "z_perm")
    TO_BE_SHIFTED = ("transcript_accumulator_x", "transcript_accumulator_y", "z_perm")
    RELATIONS = (ECCVMTranscriptRelation, ECCVMSetRelation, ECCVMLookupRelation)

    WIRE_COMMITMENTS = WIRES
    LOG_DERIVATIVE_INVERSE_COMMITMENTS = ("lookup_inverses",)
    GRAND_PRODUCT_COMMITMENTS = ("z_perm",)

    # 번역 일관성 단계에서 열어 보는 transcript 열 (레이블 접미사와 짝)
    TRANSLATION_COLUMNS = (
        ("transcript_op", "op"),
        ("transcript_Px", "Px"),
        ("transcript_Py", "Py"),
        ("transcript_z1", "z1"),
        ("transcript_z2", "z2"),
    )
