import random

# Fixed movie catalog the host draws a secret from at the start of a round.
MOVIES = (
    {'title': 'Титаник', 'year': '1997'},
    {'title': 'Матрица', 'year': '1999'},
    {'title': 'Властелин Колец', 'year': '2001'},
    {'title': 'Гарри Поттер', 'year': '2001'},
    {'title': 'Звездные Войны', 'year': '1977'},
    {'title': 'Аватар', 'year': '2009'},
    {'title': 'Король Лев', 'year': '1994'},
    {'title': 'Пираты Карибского моря', 'year': '2003'},
    {'title': 'Холодное Сердце', 'year': '2013'},
    {'title': 'Назад в будущее', 'year': '1985'},
    {'title': 'Человек-паук', 'year': '2002'},
    {'title': 'Побег из Шоушенка', 'year': '1994'},
    {'title': 'Крёстный отец', 'year': '1972'},
    {'title': 'Тёмный рыцарь', 'year': '2008'},
    {'title': '12 разгневанных мужчин', 'year': '1957'},
    {'title': 'Список Шиндлера', 'year': '1993'},
    {'title': 'Криминальное чтиво', 'year': '1994'},
    {'title': 'Хороший, плохой, злой', 'year': '1966'},
    {'title': 'Форрест Гамп', 'year': '1994'},
    {'title': 'Бойцовский клуб', 'year': '1999'},
    {'title': 'Начало', 'year': '2010'},
    {'title': 'Славные парни', 'year': '1990'},
    {'title': 'Пролетая над гнездом кукушки', 'year': '1975'},
    {'title': 'Семь', 'year': '1995'},
    {'title': 'Молчание ягнят', 'year': '1991'},
)


def pick_movie(rng=None):
    """Return a copy of a random catalog entry."""
    return dict((rng or random).choice(MOVIES))
