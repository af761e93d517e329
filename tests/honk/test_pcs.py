"""
PCS 테스트: SRS, KZG, ZeroMorph, 번역 일관성 배치

테스트 범위:
  - SRS 생성과 페어링 키
  - KZG 커밋/열기, reduce_verify 의 페어링 점 구성, 잘못된 평가값 거부
  - ZeroMorph 배치 평가값과 C_ζ_x 구성
  - 번역 일관성 배치: 커밋먼트와 평가값을 1, c, c², ... 로 묶기
"""
import pytest

from zkp.honk.claim import OpeningClaim, OpeningPair
from zkp.honk.curve import BN254
from zkp.honk.errors import ProofFormatError
from zkp.honk.field import FR, G1, G2, ec_mul, ec_add, ec_neg, ec_pairing
from zkp.honk.kzg import KZG, commit, create_witness
from zkp.honk.polynomial import Polynomial
from zkp.honk.proof import HonkProof
from zkp.honk.srs import SRS
from zkp.honk.transcript import Transcript
from zkp.honk.translation import batch_opening_claims
from zkp.honk.zeromorph import compute_batched_evaluation, compute_C_zeta_x


# ─────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="module")
def small_srs():
    return SRS.generate(size=4, seed=7)


def _opening_transcript(poly, point, srs):
    """KZG:W 하나만 담긴 증명으로 Verifier 트랜스크립트를 만든다."""
    prover = Transcript()
    prover.append_point("KZG:W", create_witness(poly, point, srs))
    return Transcript(prover.export_proof())


# ─────────────────────────────────────────────────────────────────────
# SRS
# ─────────────────────────────────────────────────────────────────────

class TestSRS:
    def test_deterministic(self):
        assert SRS.generate(size=2, seed=1).g1_powers == SRS.generate(size=2, seed=1).g1_powers

    def test_powers_consistent(self, small_srs):
        # e(τ·G1, G2) == e(G1, τ·G2)
        assert small_srs.size == 4
        assert small_srs.g1_powers[0] == G1
        assert (ec_pairing(G2, small_srs.g1_powers[1])
                == ec_pairing(small_srs.g2_powers[1], G1))

    def test_verifier_key(self, small_srs):
        vk = small_srs.verifier_key()
        assert vk.g2 == G2
        assert vk.g2_x == small_srs.g2_powers[1]


# ─────────────────────────────────────────────────────────────────────
# KZG
# ─────────────────────────────────────────────────────────────────────

class TestKZG:
    def test_commit_linear(self, small_srs):
        a = Polynomial([1, 2, 3])
        b = Polynomial([4, 0, 5])
        assert commit(a + b, small_srs) == ec_add(commit(a, small_srs), commit(b, small_srs))

    def test_commit_zero_is_identity(self, small_srs):
        assert commit(Polynomial.zero(4), small_srs) is None

    def test_commit_too_large(self, small_srs):
        with pytest.raises(ValueError):
            commit(Polynomial([1] * 5), small_srs)

    def test_reduce_verify_points(self, small_srs):
        poly = Polynomial([3, 1, 4, 1])
        r = FR(5)
        v = poly.evaluate(r)
        C = commit(poly, small_srs)
        W = create_witness(poly, r, small_srs)
        transcript = _opening_transcript(poly, r, small_srs)

        claim = OpeningClaim(OpeningPair(r, v), C)
        P0, P1 = KZG.reduce_verify(claim, transcript, BN254())
        assert P0 == ec_add(ec_add(C, ec_mul(W, r)), ec_neg(ec_mul(G1, v)))
        assert P1 == ec_neg(W)
        transcript.assert_consumed()

    def test_valid_opening(self, small_srs):
        poly = Polynomial([3, 1, 4, 1])
        r = FR(9)
        claim = OpeningClaim(OpeningPair(r, poly.evaluate(r)), commit(poly, small_srs))
        transcript = _opening_transcript(poly, r, small_srs)
        assert KZG.verify(small_srs.verifier_key(), claim, transcript, BN254())

    def test_wrong_evaluation_rejected(self, small_srs):
        poly = Polynomial([3, 1, 4, 1])
        r = FR(9)
        claim = OpeningClaim(OpeningPair(r, poly.evaluate(r) + 1), commit(poly, small_srs))
        transcript = _opening_transcript(poly, r, small_srs)
        assert not KZG.verify(small_srs.verifier_key(), claim, transcript, BN254())

    def test_off_curve_quotient_is_format_error(self, small_srs):
        claim = OpeningClaim(OpeningPair(FR(1), FR(0)), G1)
        transcript = Transcript(HonkProof([1, 1]))
        with pytest.raises(ProofFormatError):
            KZG.reduce_verify(claim, transcript, BN254())


# ─────────────────────────────────────────────────────────────────────
# ZeroMorph 도우미
# ─────────────────────────────────────────────────────────────────────

class TestZeroMorphHelpers:
    def test_batched_evaluation(self):
        rho = FR(3)
        # 1·2 + 3·5 + 9·7 (시프트 평가값은 ρ^m 부터)
        assert compute_batched_evaluation([FR(2), FR(5)], [FR(7)], rho) == FR(2 + 15 + 63)

    def test_batched_evaluation_matches_polynomial(self):
        f = Polynomial([1, 2, 3, 4])
        g = Polynomial([0, 5, 6, 7])
        u = [FR(11), FR(13)]
        rho = FR(17)
        batched = f + g * rho + g.shifted() * (rho * rho)
        v = compute_batched_evaluation(
            [f.evaluate_mle(u), g.evaluate_mle(u)], [g.shifted().evaluate_mle(u)], rho)
        assert v == batched.evaluate_mle(u)

    def test_C_zeta_x(self, small_srs):
        q0 = Polynomial([2])
        q1 = Polynomial([3, 5])
        C_q0, C_q1 = commit(q0, small_srs), commit(q1, small_srs)
        C_q = ec_mul(G1, 77)
        x, y = FR(2), FR(10)
        # N = 4: C_q − x³·C_q0 − y·x²·C_q1
        expected = ec_add(C_q, ec_neg(ec_add(ec_mul(C_q0, x ** 3), ec_mul(C_q1, y * x * x))))
        assert compute_C_zeta_x(C_q, [C_q0, C_q1], y, x, 4, BN254()) == expected


# ─────────────────────────────────────────────────────────────────────
# 번역 일관성 배치
# ─────────────────────────────────────────────────────────────────────

class TestTranslationBatching:
    def test_literal_batching(self):
        commitments = [ec_mul(G1, k + 1) for k in range(6)]
        evaluations = [FR(e) for e in (3, 5, 7, 11, 13, 17)]
        c = FR(2)
        C, v = batch_opening_claims(commitments, evaluations, c, BN254())
        # e0 + c·e1 + c²·e2 + ... + c⁵·e5
        assert v == FR(3 + 2 * 5 + 4 * 7 + 8 * 11 + 16 * 13 + 32 * 17)
        # Σ cⁱ·(i+1)·G1
        assert C == ec_mul(G1, 1 + 2 * 2 + 4 * 3 + 8 * 4 + 16 * 5 + 32 * 6)

    def test_identity_commitment_contributes_nothing(self):
        C, v = batch_opening_claims([G1, None], [FR(1), FR(1)], FR(5), BN254())
        assert C == G1
        assert v == FR(6)

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            batch_opening_claims([G1], [FR(1), FR(2)], FR(5), BN254())
