from discourse_stats.cli import main

main(prog_name="discourse-stats")
