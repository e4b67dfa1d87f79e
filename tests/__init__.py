"""
Pacote de testes automatizados (pytest).

Contém testes unitários do agente, do modelo de contato, da população,
das estatísticas e do relógio, além de testes de integração do motor e da CLI.

Para executar todos os testes:
    pytest tests/ -v
"""
