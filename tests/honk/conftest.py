import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from zkp.honk.srs import SRS
from zkp.honk.verification_key import VerificationKey

from honk_circuits import ultra_circuit, mega_circuit, eccvm_circuit, trivial_circuit
from honk_prover import HonkTestProver


SRS_SEED = 20240611


def _build(circuit, srs):
    """회로 → 검증 키 + 증명 + Prover 기록."""
    key = VerificationKey.from_precomputed_polynomials(
        circuit.flavor, circuit.precomputed, srs,
        num_public_inputs=len(circuit.public_inputs),
        pub_inputs_offset=circuit.pub_inputs_offset,
    )
    prover = HonkTestProver(circuit, srs)
    proof = prover.prove()
    return {
        "circuit": circuit,
        "key": key,
        "prover": prover,
        "proof": proof,
        "srs": srs,
    }


# ─────────────────────────────────────────────────────────────────────
# Fixtures (세션 단위: 커밋먼트와 증명 생성이 느리다)
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def srs():
    return SRS.generate(size=8, seed=SRS_SEED)


@pytest.fixture(scope="session")
def ultra_data(srs):
    """x³ + x + 5 = 35 Ultra 회로의 검증 키와 증명."""
    return _build(ultra_circuit(), srs)


@pytest.fixture(scope="session")
def mega_data(srs):
    """calldata 읽기가 있는 Mega 회로 (return_data 는 비어 있음)."""
    return _build(mega_circuit(), srs)


@pytest.fixture(scope="session")
def eccvm_data(srs):
    """점 덧셈 두 번의 ECCVM 추적."""
    return _build(eccvm_circuit(), srs)


@pytest.fixture(scope="session")
def trivial_data(srs):
    """크기 1 회로 (sumcheck 라운드 0)."""
    return _build(trivial_circuit(), srs)
