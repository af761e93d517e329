"""
Honk 검증기 예외 계층
=====================

검증 호출은 "판정(verdict)"을 돌려주거나 치명적 오류로 끝난다.
부분 검증 결과나 재시도 가능한 상태는 없다.

  HonkError
  ├── ProofFormatError        증명 버퍼 소진, 범위를 벗어난 원소,
  │                           곡선 밖의 (항등원이 아닌) 점, 크기 불일치
  ├── DegenerateChallengeError 챌린지로부터 유도한 값의 역원이 존재하지 않음
  └── VerificationKeyError    잘못된 검증 키 (회로 크기가 2의 거듭제곱이 아님 등)

암호학적 거부(sumcheck, 열기 검사 실패)는 예외가 아니라
native 모드에서는 False, recursive 모드에서는 만족 불가능한 회로로 나타난다.
"""


class HonkError(Exception):
    """Honk 검증기의 모든 치명적 오류의 기반 클래스."""


class ProofFormatError(HonkError, ValueError):
    """증명 바이트/원소열이 프로토콜 형식과 맞지 않는다."""


class DegenerateChallengeError(HonkError, ArithmeticError):
    """챌린지로부터 유도한 값이 퇴화(0)하여 역원을 구할 수 없다.

    "증명 거부"와 구별되어야 한다: 적대적 입력이거나 프로토콜 파라미터 충돌이다.
    """


class VerificationKeyError(HonkError, ValueError):
    """검증 키가 잘못 구성되었다."""
