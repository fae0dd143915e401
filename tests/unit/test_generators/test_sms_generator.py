"""Unit tests for the mock SMS generator."""

import random
from datetime import datetime
from zoneinfo import ZoneInfo

from fintrack.generators.sms import MockSmsGenerator
from fintrack.parsers.sms import SmsParser

NOW = datetime(2024, 3, 9, 11, 0, tzinfo=ZoneInfo("Asia/Kolkata"))


def make_generator(seed: int = 7) -> MockSmsGenerator:
    return MockSmsGenerator(rng=random.Random(seed), clock=lambda: NOW)


def test_same_seed_same_messages():
    gen_a, gen_b = make_generator(42), make_generator(42)
    assert [gen_a.generate() for _ in range(20)] == [gen_b.generate() for _ in range(20)]


def test_messages_carry_clock_date():
    gen = make_generator()
    for _ in range(10):
        assert "09 Mar 2024" in gen.generate()


def test_generated_messages_parse_fully():
    gen = make_generator(3)
    parser = SmsParser(clock=lambda: NOW)
    for _ in range(200):
        txn = parser.parse(gen.generate())
        assert txn.amount is not None
        assert txn.direction is not None
        assert txn.counterparty is not None
        assert txn.channel is not None
        assert txn.reference_id is not None


def test_mix_contains_credits_and_debits():
    gen = make_generator(11)
    parser = SmsParser(clock=lambda: NOW)
    directions = {parser.parse(gen.generate()).direction for _ in range(200)}
    assert len(directions) == 2


def test_some_messages_are_high_value():
    gen = make_generator(5)
    parser = SmsParser(clock=lambda: NOW)
    amounts = [parser.parse(gen.generate()).amount for _ in range(200)]
    assert any(amount >= 10000 for amount in amounts)
