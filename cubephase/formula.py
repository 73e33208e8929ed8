from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from cubephase.models import Move


class FormulaSyntaxError(ValueError):
    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at index {position}")
        self.position = position


@dataclass(frozen=True)
class _Token:
    kind: str
    value: str
    start: int


_FACE_MOVES = set("URFDLB")
_WIDE_MOVES = set("urfdlb")
_SLICE_MOVES = set("MES")
_ROTATIONS = set("xyz")

# Slice moves turn like the face they follow; cube rotations like R, U and F.
_REFERENCE_FACE = {"M": "L", "E": "D", "S": "F", "x": "R", "y": "U", "z": "F"}

_GLOBAL_AXES = (
    ("x", 1, (1.0, 0.0, 0.0)),
    ("x", -1, (-1.0, 0.0, 0.0)),
    ("y", 1, (0.0, 1.0, 0.0)),
    ("y", -1, (0.0, -1.0, 0.0)),
    ("z", 1, (0.0, 0.0, 1.0)),
    ("z", -1, (0.0, 0.0, -1.0)),
)


def split_move_modifier(move: str) -> tuple[str, str]:
    if move.endswith("2"):
        return move[:-1], "2"
    if move.endswith("'"):
        return move[:-1], "'"
    return move, ""


class FormulaConverter:
    """Parses move notation: face/slice/wide/rotations, groups and repeats."""

    @classmethod
    def convert(cls, formula: str, repeat: int = 1) -> list[str]:
        if repeat < 1:
            raise ValueError("repeat must be >= 1")

        parser = _FormulaParser(tokens=cls._tokenize(formula), formula=formula)
        moves = parser.parse_sequence()
        if parser.has_more():
            token = parser.peek()
            raise FormulaSyntaxError(f"Unexpected token '{token.value}'", token.start)
        return moves * repeat

    @classmethod
    def invert_move(cls, move: str) -> str:
        base, modifier = split_move_modifier(move)
        if not base:
            raise ValueError("Move must be non-empty")
        if modifier == "":
            return f"{base}'"
        if modifier == "'":
            return base
        return move

    @classmethod
    def invert_moves(cls, moves: list[str]) -> list[str]:
        return [cls.invert_move(move) for move in reversed(moves)]

    @staticmethod
    def _tokenize(formula: str) -> list[_Token]:
        tokens: list[_Token] = []
        i = 0
        length = len(formula)

        while i < length:
            char = formula[i]

            if char.isspace():
                i += 1
                continue

            if char in "()^":
                kind = {"(": "LPAREN", ")": "RPAREN", "^": "CARET"}[char]
                tokens.append(_Token(kind=kind, value=char, start=i))
                i += 1
                continue

            if char.isdigit():
                start = i
                while i < length and formula[i].isdigit():
                    i += 1
                tokens.append(_Token(kind="INT", value=formula[start:i], start=start))
                continue

            if char.isalpha():
                start = i
                i += 1
                if i < length and formula[i] in "wW" and char.upper() in _FACE_MOVES:
                    i += 1
                if i < length and formula[i] in "'2":
                    i += 1
                tokens.append(_Token(kind="MOVE", value=formula[start:i], start=start))
                continue

            raise FormulaSyntaxError(f"Unsupported character '{char}'", i)

        return tokens

    @staticmethod
    def normalize_move(token: _Token) -> str:
        base, modifier = split_move_modifier(token.value)

        if len(base) == 2 and base[1] in "wW" and base[0].upper() in _FACE_MOVES:
            return f"{base[0].lower()}{modifier}"
        if len(base) == 1 and (base in _FACE_MOVES or base in _WIDE_MOVES or base in _SLICE_MOVES):
            return f"{base}{modifier}"
        if len(base) == 1 and base.lower() in _ROTATIONS:
            return f"{base.lower()}{modifier}"

        raise FormulaSyntaxError(f"Unknown move token '{token.value}'", token.start)


@dataclass
class _FormulaParser:
    tokens: list[_Token]
    formula: str
    index: int = 0

    def has_more(self) -> bool:
        return self.index < len(self.tokens)

    def peek(self) -> _Token:
        return self.tokens[self.index]

    def consume(self) -> _Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def parse_sequence(self, in_group: bool = False) -> list[str]:
        moves: list[str] = []

        while self.has_more():
            token = self.peek()
            if token.kind == "RPAREN":
                if in_group:
                    break
                raise FormulaSyntaxError("Unexpected ')'", token.start)

            token = self.consume()
            if token.kind == "LPAREN":
                atom = self.parse_sequence(in_group=True)
                repeat = self.parse_repeat(allow_bare_int=True)
            elif token.kind == "MOVE":
                atom = [FormulaConverter.normalize_move(token)]
                repeat = self.parse_repeat(allow_bare_int=False)
            else:
                raise FormulaSyntaxError(f"Expected move or '(' but got '{token.value}'", token.start)
            moves.extend(atom * repeat)

        if in_group:
            if not self.has_more() or self.peek().kind != "RPAREN":
                raise FormulaSyntaxError("Missing closing ')'", len(self.formula))
            self.consume()

        return moves

    def _read_repeat(self) -> int:
        int_token = self.consume()
        repeat = int(int_token.value)
        if repeat < 1:
            raise FormulaSyntaxError("Repeat must be >= 1", int_token.start)
        return repeat

    def parse_repeat(self, allow_bare_int: bool) -> int:
        if not self.has_more():
            return 1

        token = self.peek()
        if token.kind == "CARET":
            self.consume()
            if not self.has_more() or self.peek().kind != "INT":
                raise FormulaSyntaxError("Expected integer after '^'", token.start)
            return self._read_repeat()

        if allow_bare_int and token.kind == "INT":
            return self._read_repeat()

        return 1


@dataclass(frozen=True)
class CameraView:
    """Camera basis in world space; the default looks at F with U up."""

    right: tuple[float, float, float] = (1.0, 0.0, 0.0)
    up: tuple[float, float, float] = (0.0, 1.0, 0.0)
    back: tuple[float, float, float] = (0.0, 0.0, 1.0)

    def direction_for_face(self, face: str) -> np.ndarray:
        right = np.asarray(self.right, dtype=float)
        up = np.asarray(self.up, dtype=float)
        back = np.asarray(self.back, dtype=float)
        directions = {
            "F": back,
            "B": -back,
            "R": right,
            "L": -right,
            "U": up,
            "D": -up,
        }
        if face not in directions:
            raise ValueError(f"Unknown face: {face}")
        return directions[face]


_DEFAULT_VIEW = CameraView()


def resolve_move(notation: str, view: CameraView = _DEFAULT_VIEW) -> Move:
    """Translates one normalized notation token into a Move relative to the camera."""
    base, modifier = split_move_modifier(notation)
    if len(base) != 1:
        raise ValueError(f"Unsupported move: {notation}")

    face = _REFERENCE_FACE.get(base, base.upper())
    target = view.direction_for_face(face)
    axis, layer, _ = max(_GLOBAL_AXES, key=lambda candidate: float(np.dot(candidate[2], target)))

    # Looking at a face, clockwise is a negative turn on the + side and positive on the - side.
    turns = -layer
    if modifier == "'":
        turns = -turns
    elif modifier == "2":
        turns *= 2

    if base in _SLICE_MOVES:
        slices = {0}
    elif base in _ROTATIONS:
        slices = {-1, 0, 1}
    elif base in _WIDE_MOVES:
        slices = {layer, 0}
    else:
        slices = {layer}

    return Move(axis=axis, slices=frozenset(slices), turns=turns)


def moves_from_formula(formula: str, view: CameraView = _DEFAULT_VIEW, repeat: int = 1) -> list[Move]:
    return [resolve_move(move, view) for move in FormulaConverter.convert(formula, repeat=repeat)]
