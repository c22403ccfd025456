from reeltc.cli import main

main()
