"""Console UI for wordtiles."""

import requests

from cli.api_client import TilesAPIClient

ACTION_LABELS = {
    'check': 'CHECK',
    'correct': 'CONTINUE',
    'wrong': 'TRY AGAIN'
}


class ConsoleUI:
    """Console user interface for the word-building game."""

    def __init__(self, client: TilesAPIClient):
        self.client = client

    @staticmethod
    def format_token(token: str, hint: str | None) -> str:
        return f'{token} ({hint})' if hint else token

    def print_trial(self, view: dict):
        """Print the prompt, the answer row and the numbered tiles."""
        print('\n' + '=' * 50)
        mode = 'meaning -> kanji' if view['direction'] == 'reverse' else 'kanji -> meaning'
        print(f"{view['collection']} | {mode} | Score: {view['score']}")
        print('=' * 50)
        prompt = '  '.join(self.format_token(d['token'], d['hint']) for d in view['displayed'])
        print(f'\n  >>> {prompt}\n')
        print(f"Answer: {' '.join(view['placed']) or '_'}")
        print('-' * 50)
        for i, tile in enumerate(view['tiles'], start=1):
            marker = '[x]' if tile['placed'] else '[ ]'
            print(f"  {i}. {marker} {self.format_token(tile['token'], tile['hint'])}")
        print('-' * 50)

    def print_feedback(self, view: dict):
        """Print the result of a check."""
        if view['state'] == 'correct':
            print(f"\n*** Correct! {view['feedback']} ***")
        elif view['state'] == 'wrong':
            print(f"\nNot quite. Correct answer: {view['feedback']}")
            if view['wrong_streak'] >= 3:
                print(f"({view['wrong_streak']} wrong in a row, take your time)")

    def print_status(self, stats: dict):
        """Print answer statistics."""
        print('\n' + '=' * 50)
        print('STATUS SUMMARY')
        print('=' * 50)
        print(f"Score: {stats['score']}")
        print(f"Answers: {stats['correct_answers']} correct, {stats['wrong_answers']} wrong "
              f"({stats['accuracy_display']})")
        if stats['best_answer_time'] is not None:
            print(f"Best time: {stats['best_answer_time']:.1f}s, "
                  f"average: {stats['average_answer_time']:.1f}s")
        if stats['weakest_units']:
            print('\nKanji to practice:')
            for row in stats['weakest_units']:
                print(f"  {row['unit_id']}: {row['correct']} correct, {row['wrong']} wrong")
        print('=' * 50 + '\n')

    def print_collections(self, collections: list):
        print('\nCollections:')
        for c in collections:
            print(f"  {c['key']:<12} {c['name']} ({c['unit_count']} kanji)")
        print()

    def prompt_line(self, view: dict) -> str:
        label = ACTION_LABELS.get(view['state'], 'CHECK')
        return f'[Enter = {label}] tile number, "c" clear, "collections", "status", "exit" ==> '

    def run(self, collection: str, word_length: int, direction: str | None = None):
        """Run the main game loop."""
        try:
            health = self.client.health_check()
            print(f"Connected to wordtiles server ({health['service']})")
        except requests.RequestException:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        try:
            view = self.client.start_session(collection, word_length, direction)
        except requests.HTTPError as e:
            print(f"Cannot start session: {e.response.json().get('detail', e)}")
            if e.response.status_code == 404:
                self.print_collections(self.client.get_collections())
            return

        print('\nBuild the word tile by tile, in order.')
        while True:
            if view['state'] != 'correct':
                self.print_trial(view)
            user_input = input(self.prompt_line(view)).strip()

            try:
                if user_input.lower() == 'exit':
                    print('Goodbye!')
                    return
                elif user_input.lower() == 'collections':
                    self.print_collections(self.client.get_collections())
                elif user_input.lower() == 'status':
                    self.print_status(self.client.get_stats())
                elif user_input.lower() == 'c':
                    view = self.client.clear_placed()
                elif user_input == '':
                    view = self.client.primary_action()
                    self.print_feedback(view)
                elif user_input.isdigit() and 1 <= int(user_input) <= len(view['tiles']):
                    view = self.client.tap_tile(view['tiles'][int(user_input) - 1]['token'])
                else:
                    print(f'Unknown input: {user_input}')
            except requests.RequestException as e:
                print(f"Error talking to server: {e}")
