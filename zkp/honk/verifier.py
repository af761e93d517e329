"""
Honk 검증기 (Ultra / Mega)
===========================

하나의 프로토콜 스크립트(HonkProtocol)를 두 가지 산술 백엔드 위에서 실행한다.

  UltraVerifier            native: 판정은 bool (또는 VerificationResult)
  UltraRecursiveVerifier   recursive: 판정은 지연된 페어링 점 (P0, P1),
                           하위 확인은 모두 CircuitBuilder의 제약이 된다

**프로토콜 순서** (레이블은 Fiat-Shamir 상태에 해시되므로 바꾸면 안 된다):

  1. circuit_size, public_input_size, pub_inputs_offset 수신 (검증 키와 일치해야 함)
  2. public_input_i 수신 (개수는 검증 키가 정함)
  3. W_L, W_R, W_O (+ Mega: ECC_OP_WIRE_1..4, CALLDATA, CALLDATA_READ_COUNTS,
     RETURN_DATA, RETURN_DATA_READ_COUNTS)
  4. eta, eta_two, eta_three
  5. SORTED_ACCUM, W_4
  6. beta, gamma
  7. (Mega) CALLDATA_INVERSES, RETURN_DATA_INVERSES
  8. δ_pub, δ_lookup 계산
  9. Z_PERM, Z_LOOKUP
 10. alpha_0 .. alpha_{k-1}  (부분관계식 분리자)
 11. Sumcheck:gate_challenge_0 .. (라운드 수만큼, d = 0이면 없음)
 12. sumcheck
 13. ZeroMorph → KZG reduce_verify
 14. (native) 페어링 확인

Mega 여부는 검증 키의 Flavor 플래그로 생성 시점에 한 번 정해진다.

사용 예시:
    >>> verifier = UltraVerifier(verification_key)
    >>> verifier.verify_proof(proof)
    True
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from zkp.honk.commitments import VerifierCommitments
from zkp.honk.curve import BN254
from zkp.honk.errors import ProofFormatError
from zkp.honk.kzg import KZG
from zkp.honk.relation_parameters import derive_relation_parameters
from zkp.honk.stdlib.curve import StdlibBN254
from zkp.honk.stdlib.verification_key import RecursiveVerificationKey
from zkp.honk.sumcheck import SumcheckVerifier
from zkp.honk.zeromorph import ZeroMorphVerifier

LOGGER = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────
# 결과 타입
# ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class VerificationResult:
    """하위 판정들과 그 논리곱.

    translation_verified 는 ECCVM에서만 설정된다 (그 외에는 None).
    """
    sumcheck_verified: bool
    opening_verified: bool
    translation_verified: Optional[bool] = None

    @property
    def verified(self):
        return (bool(self.sumcheck_verified) and bool(self.opening_verified)
                and self.translation_verified is not False)

    @property
    def failed_phase(self):
        """거부를 만든 첫 단계의 이름, 통과했으면 None."""
        if not self.sumcheck_verified:
            return "sumcheck"
        if not self.opening_verified:
            return "opening"
        if self.translation_verified is False:
            return "translation"
        return None

    def __bool__(self):
        return self.verified


@dataclass
class ProtocolOutput:
    """프로토콜 스크립트 한 번의 실행 결과 (페어링 전)."""
    public_inputs: List[Any]
    sumcheck_verified: bool
    P0: Any
    P1: Any
    transcript: Any
    commitments: Any
    multivariate_challenge: List[Any]
    claimed_evaluations: dict


# ─────────────────────────────────────────────────────────────────────
# 공통 프로토콜 스크립트
# ─────────────────────────────────────────────────────────────────────

def receive_preamble(transcript, key, curve):
    """회로 크기/공개 입력 수/offset을 받아 검증 키와 맞춰 본다.

    공개 입력이 없는 Flavor(ECCVM)는 circuit_size 만 받는다.

    Raises:
        ProofFormatError: 선언된 값이 검증 키와 다를 때
    """
    expected = [("circuit_size", key.circuit_size)]
    if key.flavor.HAS_PUBLIC_INPUTS:
        expected.append(("public_input_size", key.num_public_inputs))
        expected.append(("pub_inputs_offset", key.pub_inputs_offset))
    for label, value in expected:
        received = transcript.receive_scalar(label)
        if int(received) != value:
            raise ProofFormatError(
                f"증명의 {label}={int(received)}가 검증 키의 값 {value}와 다릅니다"
            )
        curve.check_equal(received, curve.scalar(value), label)


class HonkProtocol:
    """Ultra/Mega 프로토콜 스크립트. native와 recursive가 공유한다."""

    def __init__(self, key, curve):
        self.key = key
        self.flavor = key.flavor
        self.curve = curve

    def execute(self, proof):
        key, flavor, curve = self.key, self.flavor, self.curve
        transcript = curve.create_transcript(proof)

        receive_preamble(transcript, key, curve)
        public_inputs = [
            transcript.receive_scalar(f"public_input_{i}")
            for i in range(key.num_public_inputs)
        ]

        commitments = VerifierCommitments(flavor, key.commitments)
        commitments.receive_batch(transcript, flavor.WIRE_COMMITMENTS, curve)

        eta, eta_two, eta_three = transcript.get_challenges("eta", "eta_two", "eta_three")
        commitments.receive_batch(transcript, flavor.SORTED_ACCUM_COMMITMENTS, curve)

        beta, gamma = transcript.get_challenges("beta", "gamma")
        if flavor.HAS_DATABUS:
            commitments.receive_batch(
                transcript, flavor.LOG_DERIVATIVE_INVERSE_COMMITMENTS, curve
            )

        params = derive_relation_parameters(
            eta, eta_two, eta_three, beta, gamma, public_inputs,
            key.circuit_size, key.pub_inputs_offset,
        )
        commitments.receive_batch(transcript, flavor.GRAND_PRODUCT_COMMITMENTS, curve)

        alphas = [transcript.get_challenge(f"alpha_{i}")
                  for i in range(flavor.num_subrelations() - 1)]
        gate_challenges = [transcript.get_challenge(f"Sumcheck:gate_challenge_{i}")
                           for i in range(key.log_circuit_size)]

        sumcheck = SumcheckVerifier(flavor, key.log_circuit_size, transcript, curve)
        sumcheck_output = sumcheck.verify(params, alphas, gate_challenges)

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
        P0, P1 = KZG.reduce_verify(claim, transcript, curve)
        transcript.assert_consumed()

        return ProtocolOutput(
            public_inputs=public_inputs,
            sumcheck_verified=sumcheck_output.verified,
            P0=P0,
            P1=P1,
            transcript=transcript,
            commitments=commitments,
            multivariate_challenge=sumcheck_output.challenge,
            claimed_evaluations=evaluations,
        )


# ─────────────────────────────────────────────────────────────────────
# Native
# ─────────────────────────────────────────────────────────────────────

class UltraVerifier:
    """native Ultra/Mega 검증기.

    검증 키는 여러 호출이 읽기 전용으로 공유하며,
    각 호출은 자기 트랜스크립트와 커밋먼트 컬렉션을 새로 만든다.
    """

    def __init__(self, key):
        if key.flavor.IS_ECCVM:
            raise ValueError("ECCVM 검증 키는 ECCVMVerifier를 사용해야 합니다")
        self.key = key
        self.curve = BN254()
        self.transcript = None

    def verify_proof_with_result(self, proof):
        """증명을 검증하고 하위 판정을 모두 담은 결과를 돌려준다.

        Raises:
            ProofFormatError: 증명 형식 오류
            DegenerateChallengeError: 퇴화한 챌린지
        """
        LOGGER.debug("%s 증명 검증 시작: N=%d", self.key.flavor.NAME, self.key.circuit_size)
        output = HonkProtocol(self.key, self.curve).execute(proof)
        self.transcript = output.transcript

        opening_verified = KZG.pairing_check(self.key.pcs_verification_key, output.P0, output.P1)
        result = VerificationResult(
            sumcheck_verified=output.sumcheck_verified,
            opening_verified=opening_verified,
        )
        if not result.verified:
            LOGGER.info("%s 증명 거부: %s 단계", self.key.flavor.NAME, result.failed_phase)
        return result

    def verify_proof(self, proof):
        """증명을 검증한다.

        Returns:
            bool: sumcheck와 열기 확인이 모두 통과하면 True
        """
        return self.verify_proof_with_result(proof).verified


# ─────────────────────────────────────────────────────────────────────
# Recursive
# ─────────────────────────────────────────────────────────────────────

class UltraRecursiveVerifier:
    """in-circuit Ultra/Mega 검증기.

    검증 알고리즘 전체를 builder의 제약으로 다시 표현한다.
    판정은 bool이 아니라 (P0, P1) 이며, 상위 검증자가
    e(P0, [1]₂) == e(−P1, [τ]₂) 를 (보통 다른 지연 확인과 묶어서) 확인한다.
    sumcheck 실패는 만족 불가능한 회로로 나타난다.
    """

    def __init__(self, builder, key):
        """key: native VerificationKey 또는 같은 builder의 RecursiveVerificationKey."""
        if key.flavor.IS_ECCVM:
            raise ValueError("ECCVM 검증 키는 ECCVMRecursiveVerifier를 사용해야 합니다")
        self.builder = builder
        self.key = RecursiveVerificationKey.from_key(builder, key)
        self.curve = StdlibBN254(builder)
        self.transcript = None

    def verify_proof(self, proof):
        """
        Returns:
            (GroupVar, GroupVar): 지연된 페어링 점 (P0, P1)
        """
        output = HonkProtocol(self.key, self.curve).execute(proof)
        self.transcript = output.transcript
        LOGGER.debug("재귀 검증 회로: 게이트 %d개, ECC 연산 %d개",
                     self.builder.num_gates, len(self.builder.ecc_op_queue))
        return output.P0, output.P1
