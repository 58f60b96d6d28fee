from django.core.management.base import BaseCommand

from marketplace.store import admin_store, market_store


class Command(BaseCommand):
    help = 'Warms the market and admin listing caches.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset',
            action='store_true',
            help='Drop the cached snapshots first so both stores refetch.',
        )

    def handle(self, *args, **options):
        for store in (market_store, admin_store):
            if options['reset']:
                store.reset()
            snapshot = store.prefetch()
            if snapshot.has_prefetched_data:
                self.stdout.write(self.style.SUCCESS(
                    f"[{store.name}] {len(snapshot.postings)} postings, {len(snapshot.caris)} caris"
                ))
            else:
                self.stdout.write(self.style.ERROR(f"[{store.name}] Fetch failed, see the log."))
