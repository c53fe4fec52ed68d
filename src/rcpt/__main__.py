from rcpt.cli import main

main()
