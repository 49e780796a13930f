"""Routing — compiled route table with static, dynamic and wildcard rules.

Routes are compiled into an immutable lookup table; mutations build a
new table and swap it in whole.
"""
