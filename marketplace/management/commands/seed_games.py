from django.core.management.base import BaseCommand

from marketplace.models import Game

DEFAULT_GAMES = [
    ('Free Fire', 'flame'),
    ('Mobile Legend', 'sword'),
    ('Efootball', 'trophy'),
    ('FC Mobile', 'trophy'),
    ('Roblox', 'box'),
    ('PUBG', 'target'),
    ('Genshin Impact', 'sparkles'),
    ('Clash of Clans', 'shield'),
]


class Command(BaseCommand):
    help = 'Creates the default game catalog. Existing games are left untouched.'

    def handle(self, *args, **kwargs):
        created_count = 0
        for name, icon_name in DEFAULT_GAMES:
            _, created = Game.objects.get_or_create(name=name, defaults={'icon_name': icon_name})
            if created:
                created_count += 1
                self.stdout.write(f"  Added {name}")

        if not created_count:
            self.stdout.write(self.style.WARNING("Game catalog already complete."))
            return
        self.stdout.write(self.style.SUCCESS(f"Added {created_count} games."))
