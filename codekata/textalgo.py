"""String puzzles: digit roots, column titles, integer parsing and wildcard matching."""

import csv
import re

INT32_MAX = 2**31 - 1
INT32_MIN = -(2**31)
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_ATOI_RE = re.compile(r"[+-]?[0-9]+")


def get_single_digit(n):
    """Repeatedly sum the decimal digits of ``n`` until one digit remains."""
    while n > 9:
        n = sum(int(digit) for digit in str(n))
    return n


def excel_column_title(n):
    """Return the spreadsheet column title for the 1-based column ``n``."""
    letters = []
    while n > 0:
        n -= 1
        n, remainder = divmod(n, 26)
        letters.append(chr(ord("A") + remainder))
    return "".join(reversed(letters))


def my_atoi(s):
    """Parse a leading integer after spaces, clamped to the 32-bit signed range."""
    text = s.lstrip(" ")
    sign = 1
    if text[:1] == "-":
        sign = -1
        text = text[1:]
    elif text[:1] == "+":
        text = text[1:]
    result = 0
    for char in text:
        if not "0" <= char <= "9":
            break
        digit = ord(char) - ord("0")
        if result > (INT32_MAX - digit) // 10:
            return INT32_MAX if sign == 1 else INT32_MIN
        result = result * 10 + digit
    return result * sign


def is_match(s, p):
    """Match ``s`` against pattern ``p`` where '.' is any char and '*' repeats the previous."""
    if p.startswith("*"):
        raise ValueError("pattern may not start with '*'")
    m, n = len(s), len(p)
    dp = [[False] * (n + 1) for _ in range(m + 1)]
    dp[0][0] = True
    for j in range(2, n + 1, 2):
        if p[j - 1] == "*" and dp[0][j - 2]:
            dp[0][j] = True
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            char = p[j - 1]
            if char == "." or char == s[i - 1]:
                dp[i][j] = dp[i - 1][j - 1]
            elif char == "*":
                previous = p[j - 2]
                dp[i][j] = dp[i][j - 2] or (
                    (previous == s[i - 1] or previous == ".") and dp[i - 1][j]
                )
    return dp[m][n]


def read_tests(path):
    """Read every record of a CSV file; all records must have the same field count."""
    with open(path, newline="", encoding="utf-8") as handle:
        records = [row for row in csv.reader(handle) if row]
    if records:
        width = len(records[0])
        for number, row in enumerate(records, start=1):
            if len(row) != width:
                raise ValueError(f"record {number}: wrong number of fields")
    return records


def read_numbers(path):
    """Return the integers found one per line, skipping lines that are not integers."""
    numbers = []
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            line = line.rstrip("\n")
            if _ATOI_RE.fullmatch(line) and _INT64_MIN <= int(line) <= _INT64_MAX:
                numbers.append(int(line))
            else:
                print("Skipping invalid line:", line)
    return numbers