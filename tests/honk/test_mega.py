"""
Mega(data bus) 검증기 테스트

테스트 범위:
  - ecc op 블록과 calldata 읽기가 있는 회로의 native / recursive 검증
  - ECC_OP_WIRE_1..4 는 W_O 와 CALLDATA 사이에서 받는다
  - 비어 있는 return_data 열: 커밋먼트가 항등원 (0, 0)으로 전송되어도 통과
  - 역원 커밋먼트가 β, γ 다음, grand product 앞에 온다
  - bus 관련 커밋먼트와 평가값 조작 거부
"""
from zkp.honk.field import G1, CURVE_ORDER, ec_mul, point_to_affine
from zkp.honk.flavor import MegaFlavor
from zkp.honk.stdlib.builder import CircuitBuilder
from zkp.honk.verifier import UltraVerifier, UltraRecursiveVerifier


def _elements(data, label):
    start, count = data["prover"].offsets[label]
    return data["proof"].elements[start:start + count]


def _labels(manifest):
    return [label for _, label in manifest]


class TestMegaCompleteness:
    def test_native_accepts(self, mega_data):
        result = UltraVerifier(mega_data["key"]).verify_proof_with_result(mega_data["proof"])
        assert result.verified
        assert result.failed_phase is None

    def test_recursive_accepts(self, mega_data):
        builder = CircuitBuilder()
        verifier = UltraRecursiveVerifier(builder, mega_data["key"])
        P0, P1 = verifier.verify_proof(mega_data["proof"])
        assert builder.check_circuit()
        assert mega_data["key"].pcs_verification_key.pairing_check(
            P0.get_value(), P1.get_value())

    def test_empty_return_data_sent_as_identity(self, mega_data):
        assert _elements(mega_data, "RETURN_DATA") == [0, 0]
        assert _elements(mega_data, "RETURN_DATA_READ_COUNTS") == [0, 0]
        assert _elements(mega_data, "RETURN_DATA_INVERSES") == [0, 0]
        assert _elements(mega_data, "CALLDATA") != [0, 0]

    def test_ecc_op_wires(self, mega_data):
        # 행 0, 1의 ecc op 블록은 w_4 가 0이므로 네 번째 wire 만 항등원
        for label in ("ECC_OP_WIRE_1", "ECC_OP_WIRE_2", "ECC_OP_WIRE_3"):
            assert _elements(mega_data, label) != [0, 0]
        assert _elements(mega_data, "ECC_OP_WIRE_4") == [0, 0]

    def test_identity_flag_in_recursive_mode(self, mega_data):
        builder = CircuitBuilder()
        verifier = UltraRecursiveVerifier(builder, mega_data["key"])
        verifier.verify_proof(mega_data["proof"])
        assert builder.check_circuit()
        assert mega_data["key"].commitments["q_4"] is None
        assert verifier.key.commitments["q_4"].is_point_at_infinity

    def test_label_order(self, mega_data):
        labels = _labels(mega_data["prover"].transcript.manifest)
        assert labels[4:15] == ["W_L", "W_R", "W_O",
                                "ECC_OP_WIRE_1", "ECC_OP_WIRE_2", "ECC_OP_WIRE_3", "ECC_OP_WIRE_4",
                                "CALLDATA", "CALLDATA_READ_COUNTS",
                                "RETURN_DATA", "RETURN_DATA_READ_COUNTS"]
        assert (labels.index("gamma") < labels.index("CALLDATA_INVERSES")
                < labels.index("RETURN_DATA_INVERSES") < labels.index("Z_PERM"))
        assert "alpha_15" in labels
        assert "alpha_16" not in labels

    def test_manifest_matches_verifier(self, mega_data):
        verifier = UltraVerifier(mega_data["key"])
        verifier.verify_proof(mega_data["proof"])
        assert (_labels(verifier.transcript.manifest)
                == _labels(mega_data["prover"].transcript.manifest))


class TestMegaSoundness:
    def test_replaced_calldata_commitment(self, mega_data):
        proof = mega_data["proof"].copy()
        start, _ = mega_data["prover"].offsets["CALLDATA"]
        proof[start], proof[start + 1] = point_to_affine(ec_mul(G1, 3))
        assert UltraVerifier(mega_data["key"]).verify_proof(proof) is False

    def test_tampered_inverse_evaluation(self, mega_data):
        proof = mega_data["proof"].copy()
        start, _ = mega_data["prover"].offsets["Sumcheck:evaluations"]
        position = start + MegaFlavor.all_entities().index("calldata_inverses")
        proof[position] = (proof[position] + 1) % CURVE_ORDER
        result = UltraVerifier(mega_data["key"]).verify_proof_with_result(proof)
        assert result.failed_phase == "sumcheck"

    def test_recursive_tampered_inverse_evaluation(self, mega_data):
        proof = mega_data["proof"].copy()
        start, _ = mega_data["prover"].offsets["Sumcheck:evaluations"]
        position = start + MegaFlavor.all_entities().index("calldata_inverses")
        proof[position] = (proof[position] + 1) % CURVE_ORDER
        builder = CircuitBuilder()
        UltraRecursiveVerifier(builder, mega_data["key"]).verify_proof(proof)
        assert not builder.check_circuit()

    def test_replaced_ecc_op_wire_commitment(self, mega_data):
        proof = mega_data["proof"].copy()
        start, _ = mega_data["prover"].offsets["ECC_OP_WIRE_2"]
        proof[start], proof[start + 1] = point_to_affine(ec_mul(G1, 7))
        assert UltraVerifier(mega_data["key"]).verify_proof(proof) is False

    def test_tampered_ecc_op_wire_evaluation(self, mega_data):
        proof = mega_data["proof"].copy()
        start, _ = mega_data["prover"].offsets["Sumcheck:evaluations"]
        position = start + MegaFlavor.all_entities().index("ecc_op_wire_1")
        proof[position] = (proof[position] + 1) % CURVE_ORDER
        result = UltraVerifier(mega_data["key"]).verify_proof_with_result(proof)
        assert result.failed_phase == "sumcheck"
