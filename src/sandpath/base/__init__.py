"""
base — нейтральный слой инфраструктуры.

Назначение:
- выбрать FileStore (plugin или local) через runtime
- дать единый транспорт файлов (filestore) и типизированные ошибки (errors)
"""
