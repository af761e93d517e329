"""
번역 일관성(Translation Consistency) 단계 (ECCVM 전용)
=======================================================

ECCVM의 transcript 열(op, Px, Py, z1, z2)에 기록된 값이 다른 표현
(translator 회로)에 독립적으로 커밋된 값과 일치하는지 확인하기 위해,
이 열들을 같은 점 x 에서 단변수로 연다.

**순서**:
  1. Translation:hack_commitment 수신 (보조 다항식 커밋먼트)
  2. x ← Translation:evaluation_challenge_x
  3. Translation:op, :Px, :Py, :z1, :z2, Translation:hack_evaluation 수신
     (각 열 다항식의 X = x 에서의 단변수 평가값)
  4. c ← Translation:ipa_batching_challenge
  5. Horner 방식 배치 (계수 1, c, c², ...):
       C = Σᵢ cⁱ·Cᵢ,   v = Σᵢ cⁱ·vᵢ
  6. OpeningClaim (x, v, C) → 같은 기본 열기 검증기(KZG)로 확인

여섯 쌍의 순서: op, Px, Py, z1, z2, hack.
"""

import logging

from zkp.honk.claim import OpeningClaim, OpeningPair
from zkp.honk.commitments import receive_commitment

LOGGER = logging.getLogger(__name__)

HACK_COMMITMENT_LABEL = "Translation:hack_commitment"
HACK_EVALUATION_LABEL = "Translation:hack_evaluation"
EVALUATION_CHALLENGE_LABEL = "Translation:evaluation_challenge_x"
BATCHING_CHALLENGE_LABEL = "Translation:ipa_batching_challenge"


def translation_evaluation_label(suffix):
    return f"Translation:{suffix}"


def batch_opening_claims(commitments, evaluations, batching_challenge, curve):
    """계수 1, c, c², ... 로 커밋먼트와 평가값을 배치한다.

    Returns:
        (batched_commitment, batched_evaluation)
    """
    if len(commitments) != len(evaluations):
        raise ValueError(
            f"커밋먼트 {len(commitments)}개와 평가값 {len(evaluations)}개가 짝이 맞지 않습니다"
        )
    scalars = []
    batched_evaluation = None
    batching_scalar = None
    for evaluation in evaluations:
        if batching_scalar is None:
            scalars.append(1)
            term = evaluation
            batching_scalar = batching_challenge
        else:
            scalars.append(batching_scalar)
            term = evaluation * batching_scalar
            batching_scalar = batching_scalar * batching_challenge
        batched_evaluation = term if batched_evaluation is None else batched_evaluation + term
    return curve.batch_mul(commitments, scalars), batched_evaluation


class TranslationVerifier:
    """번역 일관성 주장을 하나의 OpeningClaim으로 만든다."""

    @staticmethod
    def reduce(flavor, commitments, transcript, curve):
        """
        Args:
            flavor: ECCVMFlavor
            commitments: 이미 받은 ECCVM 커밋먼트 (VerifierCommitments)

        Returns:
            OpeningClaim: (x, Σ cⁱ·vᵢ, Σ cⁱ·Cᵢ)
        """
        hack_commitment = receive_commitment(transcript, HACK_COMMITMENT_LABEL, curve)
        evaluation_challenge_x = transcript.get_challenge(EVALUATION_CHALLENGE_LABEL)

        column_commitments = [commitments[name] for name, _ in flavor.TRANSLATION_COLUMNS]
        evaluations = [
            transcript.receive_scalar(translation_evaluation_label(suffix))
            for _, suffix in flavor.TRANSLATION_COLUMNS
        ]
        evaluations.append(transcript.receive_scalar(HACK_EVALUATION_LABEL))

        batching_challenge = transcript.get_challenge(BATCHING_CHALLENGE_LABEL)
        batched_commitment, batched_evaluation = batch_opening_claims(
            column_commitments + [hack_commitment], evaluations, batching_challenge, curve
        )
        LOGGER.debug("번역 일관성 주장: %d쌍 배치", len(evaluations))
        return OpeningClaim(OpeningPair(evaluation_challenge_x, batched_evaluation),
                            batched_commitment)
