"""Extraction of tape writes, updates and finalizations from a confirmed block.

A block is taken in its JSON-RPC form, with ``json`` transaction encoding:
a mapping with a ``transactions`` list whose entries hold ``transaction``
(with ``message.accountKeys`` and ``message.instructions``) and ``meta``
(with ``err``, ``logMessages`` and ``innerInstructions``).
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

from tapedrive.consts import PROGRAM_ID, SEGMENT_SIZE
from tapedrive.event import (
    EventDecodeError,
    EventType,
    FinalizeEvent,
    UpdateEvent,
    WriteEvent,
)
from tapedrive.ix_tape import TapeInstruction, UpdateData
from tapedrive.keys import Pubkey, PubkeyError, b58decode

_PROGRAM_DATA = "Program data: "

Event = Union[WriteEvent, UpdateEvent, FinalizeEvent]


class BlockError(ValueError):
    """Raised when a block holds inconsistent or malformed tape data."""


def _invalid(reason: str) -> BlockError:
    return BlockError(f"Invalid data: {reason}")


def _mismatch(reason: str) -> BlockError:
    return BlockError(f"Mismatch between counts: {reason}")


@dataclass(frozen=True)
class SegmentKey:
    """Identifies one segment write: tape, segment number and previous slot."""

    address: Pubkey
    segment_number: int
    prev_slot: int


@dataclass(frozen=True)
class WriteInstructionData:
    """A write instruction: raw data appended to a tape."""

    address: Pubkey
    data: bytes


@dataclass(frozen=True)
class UpdateInstructionData:
    """An update instruction replacing one segment."""

    address: Pubkey
    segment_number: int
    old_data: bytes
    new_data: bytes
    proof: tuple[bytes, ...]


@dataclass(frozen=True)
class FinalizeInstructionData:
    """A finalize instruction."""

    address: Pubkey


InstructionData = Union[WriteInstructionData, UpdateInstructionData, FinalizeInstructionData]


@dataclass
class TapeBlock:
    """Tape events and instructions collected from a block, in order."""

    events: list[Event] = field(default_factory=list)
    instructions: list[InstructionData] = field(default_factory=list)


@dataclass
class ProcessedBlock:
    """Result of processing a block."""

    slot: int = 0
    finalized_tapes: dict[Pubkey, int] = field(default_factory=dict)
    segment_writes: dict[SegmentKey, bytes] = field(default_factory=dict)


def process_block(block: Mapping[str, Any], slot: int) -> ProcessedBlock:
    """Collect the segment writes and finalized tapes recorded in a block."""
    transactions = block.get("transactions")
    if transactions is None:
        raise BlockError("No transactions found in block")

    tape_block = TapeBlock()
    for tx in transactions:
        _process_transaction(tx, tape_block)

    _verify_counts(tape_block)
    result = ProcessedBlock(slot=slot)
    _merge_events_and_instructions(tape_block, result)
    return result


def _verify_counts(tape_block: TapeBlock) -> None:
    def count(items: Sequence[object], kind: type) -> int:
        return sum(isinstance(item, kind) for item in items)

    events, instructions = tape_block.events, tape_block.instructions
    if len(events) != len(instructions):
        raise _mismatch("Events and Instructions")
    if count(instructions, WriteInstructionData) != count(events, WriteEvent):
        raise _mismatch("Write instructions and events")
    if count(instructions, UpdateInstructionData) != count(events, UpdateEvent):
        raise _mismatch("Update instructions and events")
    if count(instructions, FinalizeInstructionData) != count(events, FinalizeEvent):
        raise _mismatch("Finalize instructions and events")


def _merge_events_and_instructions(tape_block: TapeBlock, merged: ProcessedBlock) -> None:
    for event, instruction in zip(tape_block.events, tape_block.instructions):
        if isinstance(event, WriteEvent) and isinstance(instruction, WriteInstructionData):
            _merge_write(event, instruction, merged)
        elif isinstance(event, UpdateEvent) and isinstance(instruction, UpdateInstructionData):
            _merge_update(event, instruction, merged)
        elif isinstance(event, FinalizeEvent) and isinstance(
            instruction, FinalizeInstructionData
        ):
            _merge_finalize(event, instruction, merged)
        else:
            raise _invalid("Event/instruction type mismatch")


def _merge_write(
    event: WriteEvent, instruction: WriteInstructionData, merged: ProcessedBlock
) -> None:
    if bytes(event.address) != bytes(instruction.address):
        raise _invalid("Write event and instruction address mismatch")

    base = max(event.num_total - event.num_added, 0)
    data = instruction.data
    segments = [data[start:start + SEGMENT_SIZE] for start in range(0, len(data), SEGMENT_SIZE)]
    if len(segments) != event.num_added:
        raise _invalid("Segment count does not match num_added")

    for offset, segment in enumerate(segments):
        key = SegmentKey(instruction.address, base + offset, event.prev_slot)
        merged.segment_writes[key] = segment


def _merge_update(
    event: UpdateEvent, instruction: UpdateInstructionData, merged: ProcessedBlock
) -> None:
    if bytes(event.address) != bytes(instruction.address):
        raise _invalid("Update event/address mismatch")
    if event.segment_number != instruction.segment_number:
        raise _invalid("Update event segment number mismatch")
    key = SegmentKey(instruction.address, instruction.segment_number, event.prev_slot)
    merged.segment_writes[key] = instruction.new_data


def _merge_finalize(
    event: FinalizeEvent, instruction: FinalizeInstructionData, merged: ProcessedBlock
) -> None:
    if bytes(event.address) != bytes(instruction.address):
        raise _invalid("Finalize event and instruction address mismatch")
    merged.finalized_tapes[instruction.address] = event.tape


def _process_transaction(tx: Mapping[str, Any], tape_block: TapeBlock) -> None:
    meta = tx.get("meta")
    if meta is not None and meta.get("err") is not None:
        return

    encoded = tx.get("transaction")
    if not isinstance(encoded, Mapping):
        return  # binary encodings carry no readable message
    message = encoded.get("message")
    if not isinstance(message, Mapping):
        return
    account_keys = message.get("accountKeys")
    if account_keys is None or not all(isinstance(key, str) for key in account_keys):
        return  # parsed messages are not handled

    if meta is not None:
        log_messages = meta.get("logMessages")
        if log_messages is not None:
            _process_log_messages(log_messages, tape_block)

    _process_instructions(account_keys, message.get("instructions") or [], tape_block)

    if meta is not None:
        for inner_set in meta.get("innerInstructions") or []:
            compiled = [
                ix for ix in inner_set.get("instructions") or [] if "programIdIndex" in ix
            ]
            _process_instructions(account_keys, compiled, tape_block)


def _process_log_messages(log_messages: Sequence[str], tape_block: TapeBlock) -> None:
    program_stack: list[Pubkey] = []
    for log in log_messages:
        if _is_program_invoke(log):
            program_id = _get_program_id(log)
            if program_id is not None:
                program_stack.append(program_id)
        elif _is_program_success(log) or _is_program_failure(log):
            if program_stack:
                program_stack.pop()

        is_tape_program = bool(program_stack) and program_stack[-1] == PROGRAM_ID
        if not (is_tape_program and log.startswith(_PROGRAM_DATA)):
            continue

        event_data = _get_event_data(log)
        if event_data is None:
            raise _invalid("Invalid log format")
        if not event_data:
            raise _invalid("Failed to parse event type")
        try:
            event_type = EventType(event_data[0])
        except ValueError:
            raise _invalid("Failed to parse event type") from None

        event_class = {
            EventType.WRITE_EVENT: WriteEvent,
            EventType.UPDATE_EVENT: UpdateEvent,
            EventType.FINALIZE_EVENT: FinalizeEvent,
        }.get(event_type)
        if event_class is None:
            continue
        try:
            tape_block.events.append(event_class.try_from_bytes(event_data))
        except EventDecodeError as exc:
            raise BlockError(f"Deserialization failed: {exc}") from exc


def _parse_pubkey(text: str) -> Pubkey:
    try:
        return Pubkey.from_string(text)
    except PubkeyError:
        raise BlockError("Invalid public key") from None


def _process_instructions(
    account_keys: Sequence[str],
    instructions: Sequence[Mapping[str, Any]],
    tape_block: TapeBlock,
) -> None:
    for ix in instructions:
        index = int(ix["programIdIndex"])
        if index >= len(account_keys):
            continue
        if _parse_pubkey(account_keys[index]) != PROGRAM_ID:
            continue
        decoded = _process_instruction(ix, account_keys)
        if decoded is not None:
            tape_block.instructions.append(decoded)


def _process_instruction(
    ix: Mapping[str, Any], account_keys: Sequence[str]
) -> Optional[InstructionData]:
    accounts = ix.get("accounts") or []
    if len(accounts) < 2:
        raise _invalid("Missing tape account")
    tape_index = int(accounts[1])
    if tape_index >= len(account_keys):
        raise _invalid("Invalid tape account index")
    tape_address = _parse_pubkey(account_keys[tape_index])

    try:
        ix_data = b58decode(ix.get("data", ""))
    except PubkeyError:
        raise _invalid("Invalid instruction data") from None
    if not ix_data:
        return None

    try:
        ix_type = TapeInstruction(ix_data[0])
    except ValueError:
        return None

    if ix_type is TapeInstruction.WRITE:
        return WriteInstructionData(tape_address, ix_data[1:])
    if ix_type is TapeInstruction.UPDATE:
        try:
            update = UpdateData.try_from_bytes(ix_data[1:])
        except ValueError as exc:
            raise BlockError(f"Deserialization failed: {exc}") from exc
        return UpdateInstructionData(
            tape_address,
            update.segment_number,
            update.old_data,
            update.new_data,
            update.proof,
        )
    if ix_type is TapeInstruction.FINALIZE:
        return FinalizeInstructionData(tape_address)
    return None


def _is_program_invoke(log: str) -> bool:
    return log.startswith("Program ") and " invoke " in log


def _is_program_success(log: str) -> bool:
    return log.startswith("Program ") and " success" in log


def _is_program_failure(log: str) -> bool:
    return log.startswith("Program ") and " failed" in log


def _get_program_id(log: str) -> Optional[Pubkey]:
    parts = log.split()
    if len(parts) < 3:
        return None
    try:
        return Pubkey.from_string(parts[1])
    except PubkeyError:
        return None


def _get_event_data(log: str) -> Optional[bytes]:
    encoded = log[len(_PROGRAM_DATA):]
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return None