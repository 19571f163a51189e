from mediaconduit_anthropic.cli import main

main()
