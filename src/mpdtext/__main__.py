from mpdtext.cli import main

main()
