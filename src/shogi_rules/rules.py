"""Legal move generation and rule checks for 本将棋.

合法手生成とルール判定。すべて純粋関数で、Position を受け取り
新しい値を返す（引数は変更しない）。

Pipeline:
  destinations()        駒ごとの移動先（幾何 + 駒の有無）
  pseudo_legal_moves()  擬似合法手（王手放置は未除外）
  legal_moves()         自玉が王手にならない手だけを残す

打ち歩詰めの判定は legal_moves() を1手先の局面で呼ぶため、
合法手生成と相互再帰になる。内側の呼び出しでは打ち歩詰め判定を
行わないので、再帰は1手分で必ず止まる。
"""

from __future__ import annotations

from shogi_rules.board import Board, Piece, Square
from shogi_rules.errors import StructuralError
from shogi_rules.moves import Drop, Move, Relocate
from shogi_rules.position import Position
from shogi_rules.types import (
    DRAGON_EXTRA_STEPS,
    FILES,
    GOLD_LIKE_WHEN_PROMOTED,
    GOLD_STEPS,
    HAND_PIECE_TYPES,
    HORSE_EXTRA_STEPS,
    PROMOTABLE_TYPES,
    PROMOTION_ZONE_DEPTH,
    RANKS,
    SLIDE_MOVES,
    STEP_MOVES,
    PieceType,
    Player,
)

# ---------------------------------------------------------------------------
# Promotion / drop policy
# ---------------------------------------------------------------------------


def can_promote_kind(kind: PieceType) -> bool:
    return kind in PROMOTABLE_TYPES


def in_promotion_zone(owner: Player, rank: int) -> bool:
    """Check if a rank is in the owner's promotion zone (enemy's 3 ranks)."""
    if owner == Player.SENTE:
        return rank <= PROMOTION_ZONE_DEPTH
    return rank > RANKS - PROMOTION_ZONE_DEPTH


def _ranks_from_far_edge(owner: Player, rank: int) -> int:
    """相手側の端から数えた段数（最奥段 = 1）。"""
    if owner == Player.SENTE:
        return rank
    return RANKS + 1 - rank


def must_promote(owner: Player, kind: PieceType, rank: int) -> bool:
    """Check if promotion is mandatory (piece would have no further moves).

    歩・香: 最奥段で成り必須。桂: 奥2段で成り必須。
    """
    depth = _ranks_from_far_edge(owner, rank)
    if kind in (PieceType.PAWN, PieceType.LANCE):
        return depth == 1
    if kind == PieceType.KNIGHT:
        return depth <= 2
    return False


def can_drop_on_rank(owner: Player, kind: PieceType, rank: int) -> bool:
    """行き所のない駒の禁止: 打った後に1歩も動けない段には打てない。"""
    return not must_promote(owner, kind, rank)


def promotion_options(piece: Piece, from_sq: Square, to_sq: Square) -> list[Relocate]:
    """Expand one destination into its Relocate variants.

    - 成れない駒・成り済みの駒: 不成のみ
    - 敵陣に絡まない移動: 不成のみ
    - 行き所がなくなる移動: 成りのみ
    - それ以外: 成り・不成の両方
    """
    plain = Relocate(from_sq, to_sq)
    if not can_promote_kind(piece.kind) or piece.promoted:
        return [plain]

    in_zone = in_promotion_zone(piece.owner, from_sq.rank) or in_promotion_zone(
        piece.owner, to_sq.rank
    )
    if not in_zone:
        return [plain]

    promoting = Relocate(from_sq, to_sq, promote=True)
    if must_promote(piece.owner, piece.kind, to_sq.rank):
        return [promoting]
    return [plain, promoting]


# ---------------------------------------------------------------------------
# Movement geometry
# ---------------------------------------------------------------------------


def _movement(piece: Piece) -> tuple[list[tuple[int, int]], list[tuple[int, int]]]:
    """Return (step directions, slide directions) in SENTE orientation."""
    kind = piece.kind
    if piece.promoted:
        if kind in GOLD_LIKE_WHEN_PROMOTED:
            return GOLD_STEPS, []
        if kind == PieceType.BISHOP:
            return HORSE_EXTRA_STEPS, SLIDE_MOVES[PieceType.BISHOP]
        if kind == PieceType.ROOK:
            return DRAGON_EXTRA_STEPS, SLIDE_MOVES[PieceType.ROOK]
    return STEP_MOVES.get(kind, []), SLIDE_MOVES.get(kind, [])


def destinations(board: Board, square: Square, piece: Piece) -> list[Square]:
    """Squares the piece on `square` can reach, ignoring check.

    自駒のあるマスには行けない。遠距離駒は駒に当たったところで止まり、
    相手駒ならそのマスを含める（取れる）。
    """
    steps, slides = _movement(piece)
    flip = piece.owner == Player.GOTE  # 後手は段方向を反転
    result: list[Square] = []

    for d_file, d_rank in steps:
        if flip:
            d_rank = -d_rank
        to = square.offset(d_file, d_rank)
        if to is None:
            continue
        target = board.piece_at(to)
        if target is None or target.owner != piece.owner:
            result.append(to)

    for d_file, d_rank in slides:
        if flip:
            d_rank = -d_rank
        to = square.offset(d_file, d_rank)
        while to is not None:
            target = board.piece_at(to)
            if target is not None and target.owner == piece.owner:
                break
            result.append(to)
            if target is not None:
                break  # 相手駒を取ったら止まる
            to = to.offset(d_file, d_rank)

    return result


# ---------------------------------------------------------------------------
# Check detection
# ---------------------------------------------------------------------------


def is_square_attacked(board: Board, target: Square, attacker: Player) -> bool:
    """attacker 側のいずれかの駒が target に利いていれば True。"""
    for square, piece in board.pieces():
        if piece.owner != attacker:
            continue
        if target in destinations(board, square, piece):
            return True
    return False


def is_in_check(position: Position, owner: Player) -> bool:
    """Check if owner's king is attacked by any opponent piece."""
    king_sq = position.board.find_king(owner)
    if king_sq is None:
        raise StructuralError("King not found", context={"owner": owner.name})
    return is_square_attacked(position.board, king_sq, owner.opponent)


def is_checkmate(position: Position) -> bool:
    """手番側が王手されていて、合法手が1つもなければ詰み。"""
    return is_in_check(position, position.turn) and not legal_moves(position)


# ---------------------------------------------------------------------------
# Move application
# ---------------------------------------------------------------------------


def apply_move(position: Position, move: Move) -> Position:
    """Apply a move and return the next position (turn flipped).

    合法性は検査しない（Game.play が事前に legal_moves で検査する）。
    """
    mover = position.turn
    board = position.board
    hand = position.hand

    if isinstance(move, Relocate):
        piece = board.piece_at(move.from_sq)
        if piece is None:
            raise StructuralError(
                "Relocate from an empty square",
                context={"file": move.from_sq.file, "rank": move.from_sq.rank},
            )

        # 取った駒は成りを戻して持ち駒へ
        captured = board.piece_at(move.to_sq)
        if captured is not None:
            hand = hand.add(mover, captured.unpromote().kind)

        moved = piece
        in_zone = in_promotion_zone(piece.owner, move.from_sq.rank) or in_promotion_zone(
            piece.owner, move.to_sq.rank
        )
        if move.promote and can_promote_kind(piece.kind) and in_zone:
            moved = piece.promote()

        board = board.set_piece(move.from_sq, None)
        board = board.set_piece(move.to_sq, moved)
    else:
        hand = hand.remove(mover, move.kind)
        board = board.set_piece(move.to_sq, Piece(mover, move.kind))

    return Position(board=board, hand=hand, turn=mover.opponent)


# ---------------------------------------------------------------------------
# Move generation
# ---------------------------------------------------------------------------


def pseudo_legal_moves(position: Position) -> list[Move]:
    """Generate pseudo-legal moves (may leave own king in check)."""
    return _pseudo_legal_moves(position, check_drop_mate=True)


def legal_moves(position: Position) -> list[Move]:
    """Generate all legal moves (excluding moves that leave king in check)."""
    return _legal_moves(position, check_drop_mate=True)


def is_legal(position: Position, move: Move) -> bool:
    return move in legal_moves(position)


def is_drop_checkmate(position: Position, move: Move) -> bool:
    """打ち歩詰め: 歩を打って王手になり、相手に合法手がない。"""
    if not isinstance(move, Drop) or move.kind != PieceType.PAWN:
        return False

    # 歩打ちで王手になるのは、打った歩のすぐ前に相手玉がいる場合だけ
    ahead = move.to_sq.offset(0, position.turn.forward)
    if ahead is None:
        return False
    target = position.board.piece_at(ahead)
    if target is None or target.kind != PieceType.KING or target.owner == position.turn:
        return False

    after = apply_move(position, move)
    # 自玉を王手に晒す歩打ちはそもそも反則（王手放置の判定に任せる）
    if is_in_check(after, position.turn):
        return False
    if not is_in_check(after, after.turn):
        return False
    # 内側の合法手生成では打ち歩詰めを判定しない（1手で打ち切り）
    return not _legal_moves(after, check_drop_mate=False)


def _legal_moves(position: Position, check_drop_mate: bool) -> list[Move]:
    mover = position.turn
    legal: list[Move] = []
    for move in _pseudo_legal_moves(position, check_drop_mate):
        after = apply_move(position, move)
        # after.turn は手番交代後なので、検査対象は指した側
        if not is_in_check(after, mover):
            legal.append(move)
    return legal


def _pseudo_legal_moves(position: Position, check_drop_mate: bool) -> list[Move]:
    moves: list[Move] = []
    _generate_board_moves(position, moves)
    _generate_drop_moves(position, moves, check_drop_mate)
    return moves


def _generate_board_moves(position: Position, moves: list[Move]) -> None:
    board = position.board
    for square, piece in board.pieces():
        if piece.owner != position.turn:
            continue
        for to in destinations(board, square, piece):
            moves.extend(promotion_options(piece, square, to))


def _generate_drop_moves(position: Position, moves: list[Move], check_drop_mate: bool) -> None:
    """Generate drop moves with 二歩, dead-piece and 打ち歩詰め restrictions."""
    player = position.turn
    board = position.board

    for kind in HAND_PIECE_TYPES:
        if position.hand_count(player, kind) <= 0:
            continue
        for file in range(1, FILES + 1):
            # 二歩: 同じ筋に自分の未成歩があれば打てない
            if kind == PieceType.PAWN and board.has_unpromoted_pawn_on_file(player, file):
                continue
            for rank in range(1, RANKS + 1):
                to = Square(file, rank)
                if board.piece_at(to) is not None:
                    continue
                if not can_drop_on_rank(player, kind, rank):
                    continue
                move = Drop(kind, to)
                if check_drop_mate and is_drop_checkmate(position, move):
                    continue
                moves.append(move)
