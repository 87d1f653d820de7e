"""
Core: expression compiler, quadrature engine and domain models.

Модули ядра не выполняют I/O и не зависят от консоли или CLI.
"""
