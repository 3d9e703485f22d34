"""Aislewalk - свободный список покупок -> маршрут по отделам магазина."""
