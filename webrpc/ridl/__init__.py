"""Lexer for the RIDL schema language."""