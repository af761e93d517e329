"""
ECCVM 검증기
=============

ECCVM은 타원곡선 연산의 실행 추적(transcript / precompute / msm 열)을 검증하는
Honk 변형이다. Ultra/Mega와 다른 점:

  - 공개 입력이 없다 (circuit_size 만 받음)
  - 모든 wire 커밋먼트를 먼저 받고, 그 다음 beta, gamma
  - 관계식 파라미터는 β², β³, δ_eccvm (집합 순열 델타)
  - 부분관계식 분리자는 하나의 챌린지 Sumcheck:alpha 의 거듭제곱
  - KZG 열기 다음에 번역 일관성 단계가 이어진다

**판정**:
  native:    sumcheck ∧ 열기 ∧ 번역 (하나라도 실패하면 거부)
  recursive: 두 쌍의 페어링 점 (P0, P1), (P0', P1')을 검증기 쪽 챌린지
             r ← Translation:pairing_points_batching 으로 하나로 접는다:
               (P0 + r·P0', P1 + r·P1')
             두 확인이 모두 성립해야 접은 확인이 성립한다 (논리합이 아님).
"""

import logging
from dataclasses import dataclass
from typing import Any, List

from zkp.honk.commitments import VerifierCommitments
from zkp.honk.curve import BN254
from zkp.honk.kzg import KZG
from zkp.honk.relation_parameters import derive_eccvm_relation_parameters
from zkp.honk.stdlib.curve import StdlibBN254
from zkp.honk.stdlib.verification_key import RecursiveVerificationKey
from zkp.honk.sumcheck import SumcheckVerifier
from zkp.honk.translation import TranslationVerifier
from zkp.honk.verifier import VerificationResult, receive_preamble
from zkp.honk.zeromorph import ZeroMorphVerifier

LOGGER = logging.getLogger(__name__)

PAIRING_POINTS_BATCHING_LABEL = "Translation:pairing_points_batching"


@dataclass
class ECCVMProtocolOutput:
    sumcheck_verified: bool
    opening_pairing_points: Any
    translation_pairing_points: Any
    transcript: Any
    multivariate_challenge: List[Any]


class ECCVMProtocol:
    """ECCVM 프로토콜 스크립트. native와 recursive가 공유한다."""

    def __init__(self, key, curve):
        self.key = key
        self.flavor = key.flavor
        self.curve = curve

    def execute(self, proof):
        key, flavor, curve = self.key, self.flavor, self.curve
        transcript = curve.create_transcript(proof)

        receive_preamble(transcript, key, curve)

        commitments = VerifierCommitments(flavor, key.commitments)
        commitments.receive_batch(transcript, flavor.WIRE_COMMITMENTS, curve)

        beta, gamma = transcript.get_challenges("beta", "gamma")
        params = derive_eccvm_relation_parameters(beta, gamma)

        commitments.receive_batch(transcript, flavor.LOG_DERIVATIVE_INVERSE_COMMITMENTS, curve)
        commitments.receive_batch(transcript, flavor.GRAND_PRODUCT_COMMITMENTS, curve)

        alpha = transcript.get_challenge("Sumcheck:alpha")
        separators = []
        alpha_pow = alpha
        for _ in range(flavor.num_subrelations() - 1):
            separators.append(alpha_pow)
            alpha_pow = alpha_pow * alpha

        gate_challenges = [transcript.get_challenge(f"Sumcheck:gate_challenge_{i}")
                           for i in range(key.log_circuit_size)]

        sumcheck = SumcheckVerifier(flavor, key.log_circuit_size, transcript, curve)
        sumcheck_output = sumcheck.verify(params, separators, gate_challenges)

        evaluations = sumcheck_output.claimed_evaluations
        claim = ZeroMorphVerifier.verify(
            commitments.get_unshifted(),
            commitments.get_to_be_shifted(),
            [evaluations[name] for name in flavor.unshifted()],
            [evaluations[name] for name in flavor.shifted()],
            sumcheck_output.challenge,
            curve.one(),
            transcript,
            curve,
        )
        opening_points = KZG.reduce_verify(claim, transcript, curve)

        translation_claim = TranslationVerifier.reduce(flavor, commitments, transcript, curve)
        translation_points = KZG.reduce_verify(translation_claim, transcript, curve)
        transcript.assert_consumed()

        return ECCVMProtocolOutput(
            sumcheck_verified=sumcheck_output.verified,
            opening_pairing_points=opening_points,
            translation_pairing_points=translation_points,
            transcript=transcript,
            multivariate_challenge=sumcheck_output.challenge,
        )


class ECCVMVerifier:
    """native ECCVM 검증기."""

    def __init__(self, key):
        if not key.flavor.IS_ECCVM:
            raise ValueError("ECCVMVerifier에는 ECCVM 검증 키가 필요합니다")
        self.key = key
        self.curve = BN254()
        self.transcript = None

    def verify_proof_with_result(self, proof):
        """
        Raises:
            ProofFormatError: 증명 형식 오류
            DegenerateChallengeError: δ_eccvm 의 곱이 0일 때
        """
        LOGGER.debug("ECCVM 증명 검증 시작: N=%d", self.key.circuit_size)
        output = ECCVMProtocol(self.key, self.curve).execute(proof)
        self.transcript = output.transcript

        pcs_vk = self.key.pcs_verification_key
        result = VerificationResult(
            sumcheck_verified=output.sumcheck_verified,
            opening_verified=KZG.pairing_check(pcs_vk, *output.opening_pairing_points),
            translation_verified=KZG.pairing_check(pcs_vk, *output.translation_pairing_points),
        )
        if not result.verified:
            LOGGER.info("ECCVM 증명 거부: %s 단계", result.failed_phase)
        return result

    def verify_proof(self, proof):
        return self.verify_proof_with_result(proof).verified


class ECCVMRecursiveVerifier:
    """in-circuit ECCVM 검증기. 두 페어링 확인을 하나로 접어 돌려준다."""

    def __init__(self, builder, key):
        if not key.flavor.IS_ECCVM:
            raise ValueError("ECCVMRecursiveVerifier에는 ECCVM 검증 키가 필요합니다")
        self.builder = builder
        self.key = RecursiveVerificationKey.from_key(builder, key)
        self.curve = StdlibBN254(builder)
        self.transcript = None

    def verify_proof(self, proof):
        """
        Returns:
            (GroupVar, GroupVar): 접힌 페어링 점 (P0 + r·P0', P1 + r·P1')
        """
        output = ECCVMProtocol(self.key, self.curve).execute(proof)
        transcript = output.transcript
        self.transcript = transcript

        P0, P1 = output.opening_pairing_points
        T0, T1 = output.translation_pairing_points
        r = transcript.get_challenge(PAIRING_POINTS_BATCHING_LABEL)
        folded_P0 = self.curve.batch_mul([P0, T0], [1, r])
        folded_P1 = self.curve.batch_mul([P1, T1], [1, r])

        LOGGER.debug("ECCVM 재귀 검증 회로: 게이트 %d개, ECC 연산 %d개",
                     self.builder.num_gates, len(self.builder.ecc_op_queue))
        return folded_P0, folded_P1
