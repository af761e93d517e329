"""
Honk 증명 버퍼
===============

증명은 평탄한(flat) 원소열이다. 각 원소는 256비트 정수 한 단어(word)이며,
  - 스칼라(FR): 1 단어
  - G1 점: 2 단어 (x, y), 항등원은 (0, 0)

검증기는 이 버퍼를 앞에서부터 순서대로 소비한다 (transcript.Transcript).
바이트 직렬화는 32바이트 빅엔디안 단어의 연결이다.

사용 예시:
    >>> proof = HonkProof([1, 2, 3])
    >>> HonkProof.from_bytes(proof.to_bytes()) == proof
    True
"""

from zkp.honk.errors import ProofFormatError

# 한 단어의 바이트 크기
WORD_SIZE = 32


class HonkProof:
    """Honk 증명: 정수 원소의 평탄한 리스트.

    속성:
        elements: 정수 리스트 (각 원소 < 2²⁵⁶)
    """

    def __init__(self, elements=None):
        self.elements = [int(e) for e in (elements or [])]

    @classmethod
    def from_bytes(cls, data):
        """32바이트 빅엔디안 단어열에서 증명을 복원한다.

        Raises:
            ProofFormatError: 길이가 32의 배수가 아닐 때
        """
        if len(data) % WORD_SIZE != 0:
            raise ProofFormatError(
                f"증명 길이 {len(data)}가 {WORD_SIZE}바이트 단어의 배수가 아닙니다"
            )
        elements = [
            int.from_bytes(data[i:i + WORD_SIZE], "big")
            for i in range(0, len(data), WORD_SIZE)
        ]
        return cls(elements)

    def to_bytes(self):
        """증명을 32바이트 빅엔디안 단어열로 직렬화한다."""
        out = bytearray()
        for element in self.elements:
            if element < 0 or element >= 1 << (8 * WORD_SIZE):
                raise ProofFormatError(f"원소 {element}는 한 단어에 들어가지 않습니다")
            out.extend(element.to_bytes(WORD_SIZE, "big"))
        return bytes(out)

    def copy(self):
        return HonkProof(list(self.elements))

    def __len__(self):
        return len(self.elements)

    def __getitem__(self, index):
        return self.elements[index]

    def __setitem__(self, index, value):
        self.elements[index] = int(value)

    def __eq__(self, other):
        if not isinstance(other, HonkProof):
            return NotImplemented
        return self.elements == other.elements

    def __repr__(self):
        return f"HonkProof({len(self.elements)} elements)"
